import click
from flask.cli import with_appcontext

from houseplanfiles.extensions import db
from houseplanfiles.models import Package, User


DEFAULT_PACKAGES = [
    {
        'title': 'Basic Floor Plan',
        'price': '4999',
        'unit': 'per plan',
        'package_type': Package.TYPE_STANDARD,
        'features': [
            '2D Floor Plan',
            'Furniture Layout',
            'Door & Window Schedule',
            'Two Revisions',
            'PDF Delivery',
        ],
        'sort_order': 1,
    },
    {
        'title': 'Complete House Design',
        'price': '14999',
        'unit': 'per plan',
        'is_popular': True,
        'package_type': Package.TYPE_STANDARD,
        'features': [
            '2D Floor Plan',
            '3D Front Elevation',
            'Structural Drawings',
            'Electrical Layout',
            'Plumbing Layout',
            'Unlimited Revisions',
        ],
        'sort_order': 2,
    },
    {
        'title': 'Premium Architect Consultation',
        'price': '₹ 15/sq.ft - Rs 25/sq.ft',
        'area_type': 'Built-up area',
        'package_type': Package.TYPE_PREMIUM,
        'features': [
            'Site Visit',
            'Vastu Compliant Planning',
            '3D Elevation & Interior Views',
            'Working Drawings',
            'Bill of Quantities',
            'Dedicated Architect',
        ],
        'sort_order': 1,
    },
]


@click.command('create-admin')
@click.option('--email', prompt=True, help='Admin email (login)')
@click.option('--name', default='Administrator', show_default=True, help='Display name')
@click.option(
    '--password',
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help='Admin password (will not be echoed)'
)
@with_appcontext
def create_admin_command(email: str, name: str, password: str) -> None:
    """Create (or update) an admin user."""
    email = (email or '').strip().lower()
    if not email:
        raise click.ClickException('Email is required.')
    if len(password or '') < 6:
        raise click.ClickException('Password must be at least 6 characters.')

    user = User.query.filter_by(email=email).first()
    created = user is None
    if created:
        user = User(email=email, name=name)
        db.session.add(user)

    user.name = name or user.name
    user.role = User.ROLE_ADMIN
    user.is_active = True
    user.set_password(password)
    db.session.commit()
    click.echo(f"{'Created' if created else 'Updated'} admin user '{user.email}'.")


@click.command('seed-packages')
@with_appcontext
def seed_packages_command() -> None:
    """Seed the default service packages (skips titles that already exist)."""
    created_count = 0
    for data in DEFAULT_PACKAGES:
        if Package.query.filter_by(title=data['title']).first() is None:
            db.session.add(Package(**data))
            created_count += 1

    db.session.commit()
    click.echo(f"Seeded {created_count} packages. Total packages: {Package.query.count()}")
