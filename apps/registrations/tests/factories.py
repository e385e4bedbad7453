import factory

from apps.events.tests.factories import EventFactory
from apps.people.tests.factories import MemberFactory

from ..models import Registration


class RegistrationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Registration

    # Autocreate a member or event for this registration if none was passed
    user = factory.SubFactory(MemberFactory)
    event = factory.SubFactory(EventFactory)

    status = Registration.statuses.CONFIRMED

    class Params:
        # These are just to more concisely define status
        confirmed = factory.Trait(status=Registration.statuses.CONFIRMED)
        waitlist = factory.Trait(status=Registration.statuses.WAITLIST)
        withdrawn = factory.Trait(status=Registration.statuses.WITHDRAWN)
