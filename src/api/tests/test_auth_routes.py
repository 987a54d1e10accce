"""Integration tests for auth routes using FastAPI TestClient with fake repositories."""

import os
import unittest
from datetime import timedelta
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from adapter.fake.refresh_token_repository import FakeRefreshTokenRepository
from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import get_refresh_token_repo, get_token_issuer, get_user_repo
from api.main import app
from domain.model.errors import ConfigError
from services.token_service import TokenIssuer
from utils.config import Config


REGISTRATION = {'name': 'Ann Lee', 'email': ' A@Example.com ', 'password': 'Abcdefg1'}


class AuthRoutesTestCase(unittest.TestCase):
    """Wires fake repositories into the app for each test."""

    def setUp(self):
        self.user_repo = FakeUserRepository()
        self.token_repo = FakeRefreshTokenRepository()
        self.issuer = TokenIssuer(Config(
            jwt_access_secret='test-secret',
            access_token_ttl=timedelta(hours=1),
            refresh_token_ttl=timedelta(days=7),
        ))
        app.dependency_overrides[get_user_repo] = lambda: self.user_repo
        app.dependency_overrides[get_refresh_token_repo] = lambda: self.token_repo
        app.dependency_overrides[get_token_issuer] = lambda: self.issuer
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()


class TestRegisterRoute(AuthRoutesTestCase):

    def test_register_created(self):
        response = self.client.post('/auth/register', json=REGISTRATION)

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['message'], 'User registered successfully')
        self.assertEqual(body['data']['email'], 'a@example.com')
        self.assertEqual(body['data']['role'], 'VICE_PRESIDENT')
        self.assertTrue(body['data']['isActive'])
        self.assertNotIn('password_hash', body['data'])
        self.assertNotIn('password', body['data'])

    def test_register_duplicate_conflict(self):
        self.client.post('/auth/register', json=REGISTRATION)

        response = self.client.post(
            '/auth/register', json={**REGISTRATION, 'email': 'a@example.COM'}
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json(), {
            'success': False,
            'message': 'User with this email already exists',
        })

    def test_register_validation_errors(self):
        response = self.client.post(
            '/auth/register', json={'name': 'A', 'email': 'bad', 'password': 'weak', 'role': 'ADMIN'}
        )

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body['success'])
        self.assertEqual(body['message'], 'Validation failed')
        self.assertEqual(set(body['errors']), {'name', 'email', 'password', 'role'})

    def test_register_invalid_json(self):
        response = self.client.post(
            '/auth/register', content=b'{not json', headers={'Content-Type': 'application/json'}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Invalid JSON payload')

    def test_register_internal_error_is_opaque(self):
        broken = MagicMock()
        broken.find_by_email.side_effect = RuntimeError('db password is hunter2')
        app.dependency_overrides[get_user_repo] = lambda: broken

        response = self.client.post('/auth/register', json=REGISTRATION)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {
            'success': False,
            'message': 'An error occurred during registration',
        })


class TestLoginRoute(AuthRoutesTestCase):

    def setUp(self):
        super().setUp()
        self.client.post('/auth/register', json=REGISTRATION)

    def test_login_success(self):
        response = self.client.post(
            '/auth/login', json={'email': 'a@example.com', 'password': 'Abcdefg1'}
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['message'], 'Login successful')
        data = body['data']
        self.assertEqual(set(data), {'accessToken', 'refreshToken', 'user'})
        self.assertEqual(len(data['refreshToken']), 128)
        self.assertEqual(data['user']['email'], 'a@example.com')
        self.assertIn(data['refreshToken'], self.token_repo.store)

    def test_wrong_password_and_unknown_email_identical(self):
        wrong_password = self.client.post(
            '/auth/login', json={'email': 'a@example.com', 'password': 'wrong'}
        )
        unknown_email = self.client.post(
            '/auth/login', json={'email': 'nobody@example.com', 'password': 'wrong'}
        )

        self.assertEqual(wrong_password.status_code, 401)
        self.assertEqual(wrong_password.status_code, unknown_email.status_code)
        self.assertEqual(wrong_password.json(), unknown_email.json())
        self.assertEqual(wrong_password.json()['message'], 'Invalid email or password')
        self.assertEqual(self.token_repo.store, {})

    def test_deactivated_account_forbidden(self):
        user = self.user_repo.find_by_email('a@example.com')
        self.user_repo.deactivate(user.id)

        response = self.client.post(
            '/auth/login', json={'email': 'a@example.com', 'password': 'Abcdefg1'}
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json()['message'], 'Account is deactivated. Please contact administrator.'
        )

    def test_login_validation(self):
        response = self.client.post('/auth/login', json={'email': 'a@example.com'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('password', response.json()['errors'])


class TestMeRoute(AuthRoutesTestCase):

    def test_me_with_valid_token(self):
        token = self.issuer.issue_access_token('user-1', 'a@example.com', 'VICE_PRESIDENT')

        response = self.client.get('/auth/me', headers={'Authorization': f'Bearer {token}'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['userId'], 'user-1')

    def test_me_without_token(self):
        response = self.client.get('/auth/me')

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'success': False, 'message': 'Not authenticated'})
        self.assertEqual(response.headers['WWW-Authenticate'], 'Bearer')

    def test_me_with_refresh_token(self):
        token = self.issuer.issue_refresh_token()

        response = self.client.get('/auth/me', headers={'Authorization': f'Bearer {token}'})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Invalid authentication credentials')
        self.assertFalse(response.json()['success'])

    def test_unknown_route_uses_envelope(self):
        response = self.client.get('/auth/nowhere')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'success': False, 'message': 'Not Found'})


class TestLifespan(unittest.TestCase):
    """Startup wiring: configuration is validated before serving."""

    @patch('api.main.create_mongodb_client', return_value=None)
    def test_missing_secret_fails_startup(self, _mock_client):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigError):
                with TestClient(app):
                    pass

    @patch('api.main.create_mongodb_client', return_value=None)
    def test_startup_without_database(self, _mock_client):
        with patch.dict(os.environ, {'JWT_ACCESS_SECRET': 'secret'}, clear=True):
            with TestClient(app) as client:
                self.assertIsInstance(app.state.token_issuer, TokenIssuer)

                register = client.post('/auth/register', json=REGISTRATION)
                health = client.get('/health')

        self.assertEqual(register.status_code, 503)
        self.assertEqual(register.json(), {'success': False, 'message': 'Database unavailable'})
        self.assertEqual(health.status_code, 503)
        self.assertEqual(health.json()['services']['mongodb']['status'], 'unhealthy')


if __name__ == '__main__':
    unittest.main()
