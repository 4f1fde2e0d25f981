"""
Packages Blueprint - service tiers, FAQ and package consultation requests.
"""

from flask import Blueprint, current_app, jsonify, request

from houseplanfiles.auth import admin_required
from houseplanfiles.domain import packages as package_rules
from houseplanfiles.extensions import db, limiter
from houseplanfiles.forms import PackageForm, PackageRequestForm
from houseplanfiles.models import Package, PackageRequest
from houseplanfiles.routes.common import (
    commit_or_abort,
    get_or_404,
    queue_delete,
    queue_export,
    queue_page,
    queue_status_update,
    validation_error,
)
from houseplanfiles.services.content import faq_items
from houseplanfiles.services.notifications import lead_lines, notify_admin
from houseplanfiles.services.pricing import current_currency, price_payload


packages_bp = Blueprint('packages', __name__)


def _serialize_package(package, currency):
    features = package_rules.truncate_features(package.features or [])
    amount = package_rules.numeric_price(package.price)
    return {
        '_id': package.id,
        'title': package.title,
        'price': package.price,
        'priceLines': package_rules.price_lines(package.price),
        'priceDisplay': price_payload(amount, currency) if amount is not None else None,
        'unit': package.unit,
        'areaType': package.area_type,
        'isPopular': bool(package.is_popular),
        'features': package.features or [],
        'visibleFeatures': features.visible,
        'hiddenFeatures': features.hidden,
        'hiddenCount': features.hidden_count,
        'toggleLabel': features.toggle_label,
        'includes': package.includes or [],
        'packageType': package.package_type,
        'sortOrder': package.sort_order or 0,
    }


def _queue_for_tier():
    tier = (request.args.get('tier') or PackageRequest.TIER_STANDARD).lower()
    if tier not in (PackageRequest.TIER_STANDARD, PackageRequest.TIER_PREMIUM):
        tier = PackageRequest.TIER_STANDARD
    return tier


@packages_bp.route('', methods=['GET'])
def list_packages():
    query = Package.query
    package_type = (request.args.get('type') or '').strip()
    if package_type:
        query = query.filter(Package.package_type == package_type)
    items = query.order_by(Package.sort_order.asc(), Package.id.asc()).all()
    currency = current_currency()
    return jsonify({
        'packages': [_serialize_package(p, currency) for p in items],
        'mobileInitialCount': package_rules.PREMIUM_MOBILE_INITIAL_COUNT,
    })


@packages_bp.route('/faq', methods=['GET'])
def package_faq():
    return jsonify({'faq': faq_items()})


@packages_bp.route('/<int:package_id>', methods=['GET'])
def package_detail(package_id):
    package = get_or_404(Package, package_id, 'Package')
    return jsonify(_serialize_package(package, current_currency()))


@packages_bp.route('', methods=['POST'])
@admin_required
def create_package():
    form = PackageForm()
    if not form.validate():
        return validation_error(form)
    package = Package()
    form.apply_to(package)
    package.sort_order = package.sort_order or 0
    db.session.add(package)
    commit_or_abort('create package')
    return jsonify(_serialize_package(package, current_currency())), 201


@packages_bp.route('/<int:package_id>', methods=['PUT'])
@admin_required
def update_package(package_id):
    package = get_or_404(Package, package_id, 'Package')
    form = PackageForm()
    if not form.validate_partial():
        return validation_error(form)
    form.apply_to(package, only=form.provided)
    commit_or_abort(f'update package #{package_id}')
    return jsonify(_serialize_package(package, current_currency()))


@packages_bp.route('/<int:package_id>', methods=['DELETE'])
@admin_required
def delete_package(package_id):
    package = get_or_404(Package, package_id, 'Package')
    db.session.delete(package)
    commit_or_abort(f'delete package #{package_id}')
    return jsonify({'message': 'Package removed', '_id': package_id})


@packages_bp.route('/requests', methods=['POST'])
@limiter.limit(lambda: current_app.config['SUBMISSION_RATE_LIMIT'])
def create_package_request():
    form = PackageRequestForm()
    if not form.validate():
        return validation_error(form)

    lead = PackageRequest(
        tier=form.tier.data or PackageRequest.TIER_STANDARD,
        package_name=form.packageName.data,
        name=form.name.data,
        email=form.email.data or None,
        whatsapp_number=form.whatsappNumber.data,
        city=form.city.data or None,
    )
    db.session.add(lead)
    commit_or_abort('save package request')

    notify_admin(
        f"New {lead.tier.title()} Package Request - {lead.package_name}",
        lead_lines('A new package consultation request was submitted.', {
            'Package': lead.package_name,
            'Name': lead.name,
            'Email': lead.email,
            'WhatsApp': lead.whatsapp_number,
            'City': lead.city,
        }),
        reply_to=lead.email,
    )
    return jsonify({
        'message': 'Request submitted successfully! Our team will contact you soon.',
        'request': lead.to_dict(),
    }), 201


@packages_bp.route('/requests', methods=['GET'])
@admin_required
def list_package_requests():
    return jsonify(queue_page(_queue_for_tier(), PackageRequest.to_dict))


@packages_bp.route('/requests/export', methods=['GET'])
@admin_required
def export_package_requests():
    return queue_export(_queue_for_tier())


@packages_bp.route('/requests/<int:request_id>/status', methods=['PUT'])
@admin_required
def update_package_request_status(request_id):
    return queue_status_update(_queue_for_tier(), request_id, PackageRequest.to_dict)


@packages_bp.route('/requests/<int:request_id>', methods=['DELETE'])
@admin_required
def delete_package_request(request_id):
    return queue_delete(_queue_for_tier(), request_id)
