"""Registration, login, profile and the admin customer list."""

from houseplanfiles.models import User


def test_register_returns_user_and_token(client):
    resp = client.post('/api/users/register', json={
        'name': 'Meera',
        'email': 'Meera@Example.com',
        'password': 'secret123',
        'role': 'seller',
        'businessName': 'Meera Homes',
    })
    assert resp.status_code == 201
    data = resp.get_json()
    assert data['email'] == 'meera@example.com'
    assert data['role'] == 'seller'
    assert data['businessName'] == 'Meera Homes'
    assert data['token']

    profile = client.get('/api/users/profile', headers={'Authorization': f"Bearer {data['token']}"})
    assert profile.status_code == 200
    assert profile.get_json()['name'] == 'Meera'


def test_register_rejects_duplicate_email(client, customer):
    resp = client.post('/api/users/register', json={
        'name': 'Again', 'email': customer['email'], 'password': 'secret123',
    })
    assert resp.status_code == 400
    assert resp.get_json()['message'] == 'email: User already exists with this email.'


def test_register_cannot_self_assign_admin(client):
    resp = client.post('/api/users/register', json={
        'name': 'Sneaky', 'email': 'sneaky@example.com', 'password': 'secret123', 'role': 'admin',
    })
    assert resp.status_code == 400
    assert 'role' in resp.get_json()['errors']


def test_register_validation_errors(client):
    resp = client.post('/api/users/register', json={'name': '', 'email': 'bad', 'password': '1'})
    assert resp.status_code == 400
    errors = resp.get_json()['errors']
    assert {'name', 'email', 'password'} <= set(errors)


def test_login(client, customer):
    resp = client.post('/api/users/login', json={'email': customer['email'].upper(), 'password': 'secret123'})
    assert resp.status_code == 200
    assert resp.get_json()['_id'] == customer['id']

    wrong = client.post('/api/users/login', json={'email': customer['email'], 'password': 'nope'})
    assert wrong.status_code == 401
    assert wrong.get_json()['message'] == 'Invalid email or password'


def test_inactive_user_cannot_login(client, make_user):
    user = make_user(is_active=False)
    resp = client.post('/api/users/login', json={'email': user['email'], 'password': 'secret123'})
    assert resp.status_code == 403


def test_missing_and_bad_tokens(client):
    assert client.get('/api/users/profile').get_json() == {'message': 'Please login to continue.'}

    resp = client.get('/api/users/profile', headers={'Authorization': 'Bearer not-a-token'})
    assert resp.status_code == 401
    assert resp.get_json()['message'] == 'Session expired. Please login again.'


def test_update_profile_and_password(client, customer):
    resp = client.put('/api/users/profile', headers=customer['headers'], json={
        'city': 'Pune', 'password': 'newsecret1',
    })
    assert resp.status_code == 200
    assert resp.get_json()['city'] == 'Pune'

    login = client.post('/api/users/login', json={'email': customer['email'], 'password': 'newsecret1'})
    assert login.status_code == 200


def test_customer_list_is_admin_only(client, admin, customer, seller):
    assert client.get('/api/users/customers', headers=customer['headers']).status_code == 403

    resp = client.get('/api/users/customers', headers=admin['headers'])
    assert resp.status_code == 200
    data = resp.get_json()
    # Only role=user accounts are customers.
    assert [row['_id'] for row in data['items']] == [customer['id']]
    assert data['total'] == 1


def test_customer_export_csv(client, admin, customer):
    resp = client.get('/api/users/customers/export', headers=admin['headers'])
    assert resp.status_code == 200
    assert resp.mimetype == 'text/csv'
    assert 'Customers_List_' in resp.headers['Content-Disposition']
    lines = resp.get_data(as_text=True).splitlines()
    assert lines[0] == 'ID,Name,Email,Phone,Joined On'
    assert lines[1].startswith(f"{customer['id']},Asha Customer,{customer['email']},N/A,")


def test_delete_customer(client, admin, customer, db):
    resp = client.delete(f"/api/users/customers/{customer['id']}", headers=admin['headers'])
    assert resp.status_code == 200
    assert db.session.get(User, customer['id']) is None

    assert client.delete(f"/api/users/customers/{admin['id']}", headers=admin['headers']).status_code == 400
