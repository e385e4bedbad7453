import os
import random
import threading

from locust import HttpUser, between, tag, task

"""
This file allows load testing an instance. The instance should be set up as normal (possibly on another machine), then
this script (using the locust tool) will fire requests at it. There is also a preparedb.py script that should be run on
the system-under-test to make sure the right events and members are present to be used by the load testing script.

# On system-under-test, make sure mysql is used (the production settings), since sqlite does not lock rows:
export DJANGO_SETTINGS_MODULE=rally.settings.production

# On the system-under-test, prepare the db normally (e.g. migrate), then load data:
./manage.py flush
./manage.py shell -c 'import tools.locust.preparedb'

# On the client, set the first member id that preparedb.py printed:
export LOCUST_FIRST_MEMBER_ID=2

# On the client install locust: pip install locust
# Then run with e.g.
    locust --host https://rally-staging.example.com --users 100 --spawn-rate 20 --tags register
# And then open http://localhost:8089 to start the test
#
# Afterwards, check that no event has more confirmed registrations than its capacity (this should print nothing):

from apps.events.models import Event
for e in Event.objects.with_registration_counts():
    if e.spots_filled > e.capacity:
        print(e, e.spots_filled, e.capacity)

# And that nobody is waiting for an event with free slots (this should print nothing either):
for e in Event.objects.with_registration_counts():
    if e.spots_filled < e.capacity and e.waitlist_count:
        print(e, e.spots_filled, e.waitlist_count)
"""

# These must match preparedb.py
num_events = 2
num_members = 250
# preparedb.py prints this, members have consecutive ids from there on
first_member_id = int(os.environ.get("LOCUST_FIRST_MEMBER_ID", 1))


class Member(HttpUser):
    wait_time = between(0, 2)
    next_member_lock = threading.Lock()
    next_member = 0
    event_list_url = '/api/events/'
    register_url = '/api/register/'

    def on_start(self):
        cls = self.__class__
        # Locust does not seem to have any way way to assign user credentials, so just keep a counter. This breaks in
        # distributed mode.
        with cls.next_member_lock:
            self.member_index = cls.next_member % num_members
            cls.next_member += 1

        response = self.client.get(self.event_list_url, name="event_list")
        assert(response.status_code == 200)
        self.event_ids = [e['id'] for e in response.json()][:num_events]
        self.member_id = first_member_id + self.member_index

    def submit(self, status, name):
        event_id = random.choice(self.event_ids)
        with self.client.post(self.register_url, name=name, catch_response=True, json={
            'userId': self.member_id,
            'eventId': event_id,
            'status': status,
        }) as response:
            # A full event (409) is a successful request too, only the member ended up on the waiting list
            if response.status_code in (200, 204, 409):
                response.success()
            elif response.status_code == 503:
                response.failure("Transient failure (Retry-After: {})".format(response.headers.get('Retry-After')))
            else:
                response.failure("Unexpected status {}".format(response.status_code))

    @tag('browse')
    @task
    def browse(self):
        response = self.client.get(self.event_list_url, params={'user': self.member_id}, name="event_list_user")
        assert(response.status_code == 200)

    @tag('register')
    @task(5)
    def register(self):
        self.submit('confirmed', name="register")

    @tag('register')
    @task(3)
    def withdraw(self):
        self.submit('withdrawn', name="withdraw")
