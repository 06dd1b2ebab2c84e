import json

from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse

User = get_user_model()


class AuthAPITestCase(TestCase):
    """Tests for sign up, sign in and sign out"""

    def setUp(self):
        self.client = Client()

    def post_json(self, name, data):
        return self.client.post(reverse(name), data=json.dumps(data), content_type='application/json')

    def test_signup_creates_user_and_signs_in(self):
        response = self.post_json('accounts:api_signup', {
            'name': 'Ada', 'email': 'Ada@Example.com', 'password': 'correct-horse-42',
        })
        self.assertEqual(response.status_code, 201)
        data = json.loads(response.content)['data']
        self.assertEqual(data['email'], 'ada@example.com')
        self.assertEqual(data['name'], 'Ada')

        user = User.objects.get(username='ada@example.com')
        self.assertTrue(user.check_password('correct-horse-42'))
        self.assertNotEqual(user.password, 'correct-horse-42')
        self.assertEqual(self.client.get(reverse('fasting:session_history')).status_code, 200)

    def test_signup_duplicate_email(self):
        User.objects.create_user(username='ada@example.com', email='ada@example.com', password='x-password-1')
        response = self.post_json('accounts:api_signup', {
            'name': 'Ada', 'email': 'ada@example.com', 'password': 'correct-horse-42',
        })
        self.assertEqual(response.status_code, 409)
        self.assertEqual(User.objects.count(), 1)

    def test_signup_short_password(self):
        response = self.post_json('accounts:api_signup', {
            'name': 'Ada', 'email': 'ada@example.com', 'password': 'short',
        })
        self.assertEqual(response.status_code, 400)
        self.assertFalse(User.objects.exists())

    def test_signup_missing_fields(self):
        for data in ({'email': 'a@example.com', 'password': 'correct-horse-42'},
                     {'name': 'Ada', 'password': 'correct-horse-42'},
                     {'name': 'Ada', 'email': 'not-an-email', 'password': 'correct-horse-42'},
                     {'name': 'Ada', 'email': 'a@example.com'}):
            response = self.post_json('accounts:api_signup', data)
            self.assertEqual(response.status_code, 400, data)
        self.assertFalse(User.objects.exists())

    def test_signin(self):
        User.objects.create_user(username='ada@example.com', email='ada@example.com', password='correct-horse-42')
        response = self.post_json('accounts:api_signin', {'email': 'ADA@example.com', 'password': 'correct-horse-42'})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(json.loads(response.content)['success'])

    def test_signin_wrong_password(self):
        User.objects.create_user(username='ada@example.com', email='ada@example.com', password='correct-horse-42')
        response = self.post_json('accounts:api_signin', {'email': 'ada@example.com', 'password': 'nope-nope-nope'})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(json.loads(response.content)['error'], 'Invalid email or password')

    def test_signout(self):
        user = User.objects.create_user(username='ada@example.com', password='correct-horse-42')
        self.client.force_login(user)
        response = self.post_json('accounts:api_signout', {})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(reverse('fasting:session_history')).status_code, 401)


class AuthPageTests(TestCase):

    def test_signin_page_renders(self):
        response = self.client.get(reverse('accounts:signin'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Sign in')

    def test_signed_in_user_is_redirected_home(self):
        user = User.objects.create_user(username='ada@example.com', password='correct-horse-42')
        self.client.force_login(user)
        response = self.client.get(reverse('accounts:signup'))
        self.assertRedirects(response, reverse('home'))
