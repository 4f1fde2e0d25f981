from houseplanfiles.models import Package, User


def test_create_admin(runner, db):
    result = runner.invoke(args=['create-admin', '--email', 'Boss@Example.com', '--password', 'topsecret'])
    assert result.exit_code == 0, result.output
    assert "Created admin user 'boss@example.com'." in result.output

    user = User.query.filter_by(email='boss@example.com').one()
    assert user.is_admin
    assert user.check_password('topsecret')


def test_create_admin_promotes_existing_user(runner, customer):
    result = runner.invoke(args=['create-admin', '--email', customer['email'], '--password', 'newpass1'])
    assert result.exit_code == 0, result.output
    assert 'Updated admin user' in result.output
    assert User.query.filter_by(email=customer['email']).one().role == User.ROLE_ADMIN


def test_create_admin_rejects_short_password(runner):
    result = runner.invoke(args=['create-admin', '--email', 'a@example.com', '--password', '123'])
    assert result.exit_code != 0
    assert 'Password must be at least 6 characters.' in result.output


def test_seed_packages_is_idempotent(runner, db):
    first = runner.invoke(args=['seed-packages'])
    assert 'Seeded 3 packages. Total packages: 3' in first.output

    second = runner.invoke(args=['seed-packages'])
    assert 'Seeded 0 packages. Total packages: 3' in second.output

    premium = Package.query.filter_by(package_type=Package.TYPE_PREMIUM).one()
    assert premium.price == '₹ 15/sq.ft - Rs 25/sq.ft'
