import pytest

from nephranet.extensions import db
from nephranet.models import User


def test_register_creates_user(client, app):
    r = client.post('/register', data={
        'name': 'Sita',
        'email': 'Sita@Example.com',
        'password': 'secret1',
        'confirm_password': 'secret1'
    })
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/login')

    with app.app_context():
        user = User.query.filter_by(email='sita@example.com').first()
        assert user is not None
        assert user.display_name == 'Sita'
        assert user.password_hash != 'secret1'


def test_register_without_name_uses_email_prefix(client, app):
    client.post('/register', data={
        'email': 'ram.k@example.com',
        'password': 'secret1',
        'confirm_password': 'secret1'
    })
    with app.app_context():
        user = User.query.filter_by(email='ram.k@example.com').first()
        assert user.name is None
        assert user.display_name == 'ram.k'


def test_register_validation_messages(client, user):
    cases = [
        ({'email': 'nope', 'password': 'secret1', 'confirm_password': 'secret1'},
         'Please provide a valid email address.'),
        ({'email': 'new@example.com', 'password': '123', 'confirm_password': '123'},
         'Password must be at least 6 characters long.'),
        ({'email': 'new@example.com', 'password': 'secret1', 'confirm_password': 'secret2'},
         'Passwords do not match.'),
        ({'email': user.email, 'password': 'secret1', 'confirm_password': 'secret1'},
         'Email already registered.'),
    ]
    for data, message in cases:
        r = client.post('/register', data=data)
        assert r.status_code == 200
        assert message in r.get_data(as_text=True)


def test_login_and_logout(client, user):
    r = client.post('/login', data={'email': user.email, 'password': user.password}, follow_redirects=True)
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert 'Welcome back, Asha!' in body
    assert 'Logout' in body

    r = client.get('/logout', follow_redirects=True)
    body = r.get_data(as_text=True)
    assert 'You have been logged out successfully.' in body
    assert 'Sign Up' in body


def test_login_rejects_wrong_password(client, user):
    r = client.post('/login', data={'email': user.email, 'password': 'wrong-pass'})
    assert r.status_code == 200
    assert 'Invalid email or password' in r.get_data(as_text=True)


def test_login_requires_both_fields(client):
    r = client.post('/login', data={'email': '', 'password': ''})
    assert 'Please provide both email and password.' in r.get_data(as_text=True)


def test_upload_redirects_to_login_then_back(client, user):
    r = client.get('/upload')
    assert r.status_code == 302
    assert '/login' in r.headers['Location']
    assert 'next=' in r.headers['Location']

    r = client.post('/login?next=/upload', data={'email': user.email, 'password': user.password})
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/upload')


@pytest.mark.parametrize('target', [
    'https://evil.example.com/',
    '//evil.example.com/',
    '///evil.example.com/',
    '/\\evil.example.com/',
    'javascript:alert(1)',
])
def test_login_ignores_external_next(client, user, target):
    r = client.post('/login', query_string={'next': target},
                    data={'email': user.email, 'password': user.password})
    assert r.status_code == 302
    assert 'evil.example.com' not in r.headers['Location']
    assert 'javascript' not in r.headers['Location']


def test_authenticated_user_skips_auth_pages(auth_client):
    assert auth_client.get('/login').status_code == 302
    assert auth_client.get('/register').status_code == 302


def test_user_loader(app, user):
    with app.app_context():
        assert db.session.get(User, user.id).email == user.email
