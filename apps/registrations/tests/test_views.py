import json
from unittest import mock

from django.db.utils import OperationalError
from django.test import TestCase, override_settings
from django.urls import reverse
from parameterized import parameterized

from apps.events.tests.factories import EventFactory
from apps.people.tests.factories import MemberFactory

from ..models import Registration
from ..services import RegistrationStatusService
from .factories import RegistrationFactory


class TestSubmitRegistrationView(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.event = EventFactory(capacity=1)
        cls.user = MemberFactory()
        cls.other_user = MemberFactory()
        cls.url = reverse('registrations:submit')

    def post(self, data, **kwargs):
        if not isinstance(data, (str, bytes)):
            data = json.dumps(data)
        return self.client.post(self.url, data=data, content_type='application/json', **kwargs)

    def submit(self, user, status, event=None):
        return self.post({'userId': user.pk, 'eventId': (event or self.event).pk, 'status': status})

    def test_confirm(self):
        response = self.submit(self.user, 'confirmed')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': "Registration updated", 'status': 'confirmed'})
        self.assertEqual(Registration.objects.get(user=self.user).status, Registration.statuses.CONFIRMED)

    def test_event_full(self):
        RegistrationFactory(event=self.event, user=self.other_user, confirmed=True)

        response = self.submit(self.user, 'confirmed')

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json(), {
            'message': "Event is full. You have been added to the waitlist.",
            'status': 'waitlist',
        })
        self.assertEqual(Registration.objects.get(user=self.user).status, Registration.statuses.WAITLIST)

    def test_withdrawn_reregister_on_full_event(self):
        RegistrationFactory(event=self.event, user=self.user, withdrawn=True)
        RegistrationFactory(event=self.event, user=self.other_user, confirmed=True)

        response = self.submit(self.user, 'confirmed')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'message': "Registration updated", 'status': 'withdrawn'})
        self.assertEqual(Registration.objects.get(user=self.user).status, Registration.statuses.WITHDRAWN)

    def test_withdraw(self):
        RegistrationFactory(event=self.event, user=self.user, confirmed=True)
        waiting = RegistrationFactory(event=self.event, user=self.other_user, waitlist=True)

        response = self.submit(self.user, 'withdrawn')

        self.assertEqual(response.status_code, 204)
        self.assertEqual(response.content, b'')
        waiting.refresh_from_db()
        self.assertEqual(waiting.status, Registration.statuses.CONFIRMED)

    def test_withdraw_unregistered(self):
        response = self.submit(self.user, 'withdrawn')
        self.assertEqual(response.status_code, 204)

    @parameterized.expand([
        ("missing user", {'eventId': 1, 'status': 'confirmed'}, 'userId'),
        ("missing event", {'userId': 1, 'status': 'confirmed'}, 'eventId'),
        ("missing status", {'userId': 1, 'eventId': 1}, 'status'),
        ("non-numeric event", {'userId': 1, 'eventId': 'abc', 'status': 'confirmed'}, 'eventId'),
        ("zero user", {'userId': 0, 'eventId': 1, 'status': 'confirmed'}, 'userId'),
        ("waitlist status", {'userId': 1, 'eventId': 1, 'status': 'waitlist'}, 'status'),
        ("unknown status", {'userId': 1, 'eventId': 1, 'status': 'yes please'}, 'status'),
    ])
    def test_invalid_request(self, _name, data, field):
        with mock.patch.object(RegistrationStatusService, 'submit') as submit:
            response = self.post(data)

        submit.assert_not_called()
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body['retryable'])
        self.assertIn(field, body['errors'])
        self.assertFalse(Registration.objects.exists())

    @parameterized.expand([
        ("not json", "userId=1&eventId=1"),
        ("json list", "[1, 2]"),
        ("empty", ""),
    ])
    def test_malformed_body(self, _name, data):
        response = self.post(data)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': "Request body must be a JSON object", 'retryable': False})

    def test_missing_event(self):
        response = self.post({'userId': self.user.pk, 'eventId': self.event.pk + 1000, 'status': 'confirmed'})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], "Event not found")
        self.assertFalse(Registration.objects.exists())

    def test_missing_member(self):
        response = self.post({'userId': self.other_user.pk + 1000, 'eventId': self.event.pk, 'status': 'confirmed'})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], "Member not found")

    @override_settings(REGISTRATION_RETRY_AFTER=5)
    def test_transient_failure(self):
        RegistrationFactory(event=self.event, user=self.other_user, confirmed=True)

        with mock.patch.object(RegistrationStatusService, '_fill_from_waitlist',
                               side_effect=OperationalError("Lock wait timeout exceeded")):
            with self.assertLogs('apps.registrations.services', level='WARNING'):
                response = self.submit(self.other_user, 'withdrawn')

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response['Retry-After'], '5')
        body = response.json()
        self.assertTrue(body['retryable'])
        self.assertEqual(body['error'], "Could not update registration, please try again")
        self.assertEqual(Registration.objects.get(user=self.other_user).status, Registration.statuses.CONFIRMED)

    def test_get_not_allowed(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 405)
