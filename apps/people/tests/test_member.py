from django.contrib.auth import get_user_model
from django.test import TestCase

from .factories import MemberFactory


class TestMember(TestCase):
    def test_create_user(self):
        member = get_user_model().objects.create_user('Someone@EXAMPLE.com', password='secret')

        self.assertEqual(member.email, 'Someone@example.com')
        self.assertTrue(member.check_password('secret'))
        self.assertFalse(member.is_staff)
        self.assertEqual(get_user_model().objects.get_by_natural_key('Someone@example.com'), member)

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            get_user_model().objects.create_user('')

    def test_create_superuser(self):
        member = get_user_model().objects.create_superuser('admin@example.com', password='secret')
        self.assertTrue(member.is_staff)
        self.assertTrue(member.is_superuser)

    def test_names(self):
        member = MemberFactory(first_name="Ada", last_name="Lovelace", email="ada@example.com")
        self.assertEqual(member.get_full_name(), "Ada Lovelace")
        self.assertEqual(member.get_short_name(), "Ada")
        self.assertEqual(str(member), "Ada Lovelace")

    def test_names_fall_back_to_email(self):
        member = MemberFactory(first_name="", last_name="", email="anonymous@example.com")
        self.assertEqual(member.get_full_name(), "anonymous@example.com")
        self.assertEqual(member.get_short_name(), "anonymous@example.com")
