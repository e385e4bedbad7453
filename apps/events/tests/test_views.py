from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from apps.people.tests.factories import MemberFactory
from apps.registrations.tests.factories import RegistrationFactory

from .factories import EventFactory


class TestEventList(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = MemberFactory()
        cls.later = EventFactory(starts_in_days=5, capacity=1, title="Later", venue="Hall")
        cls.sooner = EventFactory(starts_in_days=2, capacity=3, title="Sooner")

        RegistrationFactory(event=cls.later, user=cls.user, confirmed=True)
        RegistrationFactory.create_batch(2, event=cls.later, waitlist=True)
        RegistrationFactory(event=cls.sooner, user=cls.user, withdrawn=True)
        cls.url = reverse('events:event_list')

    def test_list(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([e['id'] for e in data], [self.sooner.pk, self.later.pk])
        self.assertEqual(data[1], {
            'id': self.later.pk,
            'title': "Later",
            'description': self.later.description,
            'venue': "Hall",
            'start_time': self.later.starts_at.isoformat(),
            'end_time': self.later.ends_at.isoformat(),
            'capacity': 1,
            'spots_filled': 1,
            'waitlist_count': 2,
        })
        self.assertNotIn('user_status', data[0])

    def test_list_for_user(self):
        other = MemberFactory()

        with self.subTest("registered member"):
            data = {e['id']: e for e in self.client.get(self.url, {'user': self.user.pk}).json()}
            self.assertEqual(data[self.later.pk]['user_status'], 'confirmed')
            self.assertIs(data[self.later.pk]['is_registered'], True)
            self.assertEqual(data[self.sooner.pk]['user_status'], 'withdrawn')
            self.assertIs(data[self.sooner.pk]['is_registered'], False)

        with self.subTest("unregistered member"):
            data = self.client.get(self.url, {'user': other.pk}).json()
            self.assertEqual([e['user_status'] for e in data], [None, None])
            self.assertEqual([e['is_registered'] for e in data], [False, False])

    def test_list_unknown_user(self):
        for user_id in (str(self.user.pk + 1000), 'abc'):
            with self.subTest(user=user_id):
                self.assertEqual(self.client.get(self.url, {'user': user_id}).status_code, 404)


class TestEventRegistrations(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.event = EventFactory(capacity=2)
        RegistrationFactory(event=cls.event, confirmed=True, user=MemberFactory(first_name="Zoe", last_name="Zwart"))
        RegistrationFactory(event=cls.event, confirmed=True, user=MemberFactory(first_name="Ada", last_name="Aal"))
        now = timezone.now()
        RegistrationFactory(event=cls.event, waitlist=True, created_at=now,
                            user=MemberFactory(first_name="Second", last_name="Waiting"))
        RegistrationFactory(event=cls.event, waitlist=True, created_at=now - timedelta(minutes=1),
                            user=MemberFactory(first_name="First", last_name="Waiting"))
        RegistrationFactory(event=cls.event, withdrawn=True)

    def test_participants(self):
        response = self.client.get(reverse('events:event_participants', args=(self.event.pk,)))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'participants': ["Ada Aal", "Zoe Zwart"]})

    def test_waitlist(self):
        response = self.client.get(reverse('events:event_waitlist', args=(self.event.pk,)))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'waitlist': ["First Waiting", "Second Waiting"]})

    def test_empty_event(self):
        event = EventFactory()
        self.assertEqual(self.client.get(reverse('events:event_participants', args=(event.pk,))).json(),
                         {'participants': []})
        self.assertEqual(self.client.get(reverse('events:event_waitlist', args=(event.pk,))).json(),
                         {'waitlist': []})

    def test_unknown_event(self):
        for name in ('events:event_participants', 'events:event_waitlist'):
            with self.subTest(view=name):
                response = self.client.get(reverse(name, args=(self.event.pk + 1000,)))
                self.assertEqual(response.status_code, 404)
