"""
Users Blueprint - registration, login, profile and the admin customer list.
"""

from datetime import datetime

from flask import Blueprint, current_app, jsonify
from flask_login import current_user, login_required
from sqlalchemy.exc import IntegrityError

from houseplanfiles.auth import admin_required, issue_token
from houseplanfiles.extensions import db, limiter
from houseplanfiles.forms import LoginForm, ProfileForm, RegisterForm
from houseplanfiles.models import User
from houseplanfiles.routes.common import (
    commit_or_abort,
    get_or_404,
    queue_export,
    queue_page,
    validation_error,
)
from houseplanfiles.utils.db_resilience import with_db_resilience


users_bp = Blueprint('users', __name__)


def _session_payload(user):
    payload = user.to_dict()
    payload['token'] = issue_token(user)
    return payload


@with_db_resilience(max_retries=2, backoff_ms=100)
def _find_user_by_email(email):
    return User.query.filter_by(email=email).first()


@users_bp.route('/register', methods=['POST'])
@limiter.limit(lambda: current_app.config['SUBMISSION_RATE_LIMIT'])
def register():
    form = RegisterForm()
    if not form.validate():
        return validation_error(form)

    user = User(
        name=form.name.data,
        email=form.email.data.lower(),
        phone=form.phone.data or None,
        role=form.role.data or User.ROLE_USER,
        business_name=form.businessName.data or None,
        city=form.city.data or None,
        address=form.address.data or None,
    )
    user.set_password(form.password.data)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'message': 'User already exists with this email.'}), 400

    current_app.logger.info('Registered user id=%s role=%s', user.id, user.role)
    return jsonify(_session_payload(user)), 201


@users_bp.route('/login', methods=['POST'])
@limiter.limit(lambda: current_app.config['SUBMISSION_RATE_LIMIT'])
def login():
    form = LoginForm()
    if not form.validate():
        return validation_error(form)

    user = _find_user_by_email(form.email.data.lower())
    if user is None or not user.check_password(form.password.data):
        return jsonify({'message': 'Invalid email or password'}), 401
    if not user.is_active:
        return jsonify({'message': 'Your account has been deactivated.'}), 403

    user.last_login = datetime.utcnow()
    commit_or_abort('record login')
    return jsonify(_session_payload(user))


@users_bp.route('/profile', methods=['GET'])
@login_required
def get_profile():
    return jsonify(current_user.to_dict())


@users_bp.route('/profile', methods=['PUT'])
@login_required
def update_profile():
    form = ProfileForm()
    if not form.validate_partial():
        return validation_error(form)

    provided = form.provided
    if 'password' in provided:
        current_user.set_password(form.password.data)
    form.apply_to(current_user, only=[name for name in provided if name != 'password'])
    commit_or_abort('update profile')
    return jsonify(_session_payload(current_user))


@users_bp.route('/customers', methods=['GET'])
@admin_required
def list_customers():
    return jsonify(queue_page('customers', User.to_dict))


@users_bp.route('/customers/export', methods=['GET'])
@admin_required
def export_customers():
    return queue_export('customers')


@users_bp.route('/customers/<int:user_id>', methods=['DELETE'])
@admin_required
def delete_customer(user_id):
    user = get_or_404(User, user_id, 'User')
    if user.is_admin:
        return jsonify({'message': 'Admin accounts cannot be deleted.'}), 400
    db.session.delete(user)
    commit_or_abort(f'delete user #{user_id}')
    return jsonify({'message': 'User removed', '_id': user_id})
