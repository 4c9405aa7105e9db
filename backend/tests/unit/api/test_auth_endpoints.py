"""
Unit Tests for Authentication API Endpoints
"""
import pytest
from httpx import AsyncClient
from faker import Faker


fake = Faker()


class TestUserRegistration:
    """Test user registration endpoint"""

    async def test_register_success(self, client: AsyncClient, test_user_data):
        response = await client.post('/api/v1/auth/register', json=test_user_data)

        assert response.status_code == 201
        data = response.json()
        assert data['message'] == 'User created successfully'
        assert data['user']['email'] == test_user_data['email']
        assert data['user']['name'] == test_user_data['name']
        assert 'id' in data['user']
        assert 'hashed_password' not in data['user']  # Should not expose password

    async def test_register_duplicate_email(self, client: AsyncClient, test_user, test_password):
        response = await client.post('/api/v1/auth/register', json={
            'name': fake.name(),
            'email': test_user.email,
            'password': test_password,
        })

        assert response.status_code == 400
        assert response.json()['message'] == 'User already exists'

    @pytest.mark.parametrize('missing', ['name', 'email', 'password'])
    async def test_register_missing_fields(self, client: AsyncClient, test_user_data, missing):
        test_user_data.pop(missing)

        response = await client.post('/api/v1/auth/register', json=test_user_data)

        assert response.status_code == 400
        assert response.json()['message'] == 'Missing required fields'

    async def test_register_invalid_email(self, client: AsyncClient, test_user_data):
        test_user_data['email'] = 'not-an-email'

        response = await client.post('/api/v1/auth/register', json=test_user_data)

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'

    async def test_register_with_short_password(self, client: AsyncClient, test_user_data):
        test_user_data['password'] = '123'

        response = await client.post('/api/v1/auth/register', json=test_user_data)

        assert response.status_code == 400
        assert response.json()['error']['details']['field'] == 'password'


class TestUserLogin:
    """Test login endpoint"""

    async def test_login_success(self, client: AsyncClient, test_user, test_password):
        response = await client.post('/api/v1/auth/login', json={
            'email': test_user.email,
            'password': test_password,
        })

        assert response.status_code == 200
        data = response.json()
        assert data['token_type'] == 'bearer'
        assert data['access_token']
        assert data['user']['id'] == test_user.id

    async def test_login_token_opens_session(self, client: AsyncClient, test_user, test_password):
        login = await client.post('/api/v1/auth/login', json={
            'email': test_user.email,
            'password': test_password,
        })
        token = login.json()['access_token']

        response = await client.get('/api/v1/auth/me', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 200
        assert response.json()['email'] == test_user.email

    async def test_login_wrong_password(self, client: AsyncClient, test_user):
        response = await client.post('/api/v1/auth/login', json={
            'email': test_user.email,
            'password': 'wrongpassword',
        })

        assert response.status_code == 401
        assert response.json()['message'] == 'Invalid email or password'

    async def test_login_unknown_email_same_message(self, client: AsyncClient, test_password):
        response = await client.post('/api/v1/auth/login', json={
            'email': fake.email(),
            'password': test_password,
        })

        assert response.status_code == 401
        assert response.json()['message'] == 'Invalid email or password'

    async def test_login_inactive_user(self, client: AsyncClient, user_factory, test_password):
        user = await user_factory(is_active=False)

        response = await client.post('/api/v1/auth/login', json={
            'email': user.email,
            'password': test_password,
        })

        assert response.status_code == 401


class TestCurrentUser:
    """Test /auth/me"""

    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get('/api/v1/auth/me')

        assert response.status_code == 401
        assert response.json()['error']['code'] == 'UNAUTHORIZED'

    async def test_me_rejects_garbage_token(self, client: AsyncClient):
        response = await client.get('/api/v1/auth/me', headers={'Authorization': 'Bearer nonsense'})

        assert response.status_code == 401

    async def test_me_inactive_user(self, client: AsyncClient, user_factory, headers_for):
        user = await user_factory(is_active=False)

        response = await client.get('/api/v1/auth/me', headers=headers_for(user))

        assert response.status_code == 401
