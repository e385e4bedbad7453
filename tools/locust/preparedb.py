import sys

from apps.events.tests.factories import EventFactory
from apps.people.models import Member
from apps.people.tests.factories import MemberFactory

num_events = 2
num_members = 250
capacity = 25

sys.stdout.write("Creating events...\n")
# Few slots for many members, so most registrations end up on the waiting list and withdrawals promote others
events = EventFactory.create_batch(num_events, starts_in_days=100, capacity=capacity)

sys.stdout.write("Creating admin member...\n")
Member.objects.create_superuser("admin@example.com")

members = []
for i in range(num_members):
    sys.stdout.write("\rCreating members... {}/{}".format(i + 1, num_members))
    sys.stdout.flush()

    members.append(MemberFactory(email="member{}@example.com".format(i)))

sys.stdout.write("\n")
sys.stdout.write("Events: {}\n".format(", ".join(str(event.pk) for event in events)))
sys.stdout.write("First member id: {} (use as LOCUST_FIRST_MEMBER_ID)\n".format(members[0].pk))

sys.stdout.write("Done\n")
