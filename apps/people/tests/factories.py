import factory

from ..models import Member


class MemberFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Member
        django_get_or_create = ('email',)

    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    email = factory.Sequence(lambda n: 'member{}@example.com'.format(n))
    membership_number = factory.Sequence(lambda n: 'M{:05d}'.format(n))
