"""
Marketplace Blueprint - third-party seller listings and buyer inquiries.
"""

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user

from houseplanfiles.auth import admin_required, roles_required
from houseplanfiles.extensions import db, limiter
from houseplanfiles.forms import SellerInquiryForm, SellerProductForm
from houseplanfiles.models import SellerInquiry, SellerProduct, User
from houseplanfiles.routes.common import (
    commit_or_abort,
    get_or_404,
    queue_delete,
    queue_export,
    queue_page,
    queue_status_update,
    validation_error,
)
from houseplanfiles.services import directory
from houseplanfiles.services.notifications import lead_lines, notify_admin


marketplace_bp = Blueprint('marketplace', __name__)

INQUIRY_QUEUE = 'seller-inquiries'


def _owned_or_404(product_id):
    product = get_or_404(SellerProduct, product_id, 'Product')
    if product.seller_id != current_user.id and not current_user.is_admin:
        return None
    return product


@marketplace_bp.route('/public', methods=['GET'])
def public_listings():
    limit = current_app.config['SELLER_PUBLIC_LIMIT']
    # Facets describe the whole public list, not the filtered view.
    everything = directory.public_seller_products(limit)
    category = (request.args.get('category') or '').strip()
    city = (request.args.get('city') or '').strip()
    search = (request.args.get('search') or '').strip()
    if category or city or search:
        products = directory.public_seller_products(limit, category=category, city=city, search=search)
    else:
        products = everything

    return jsonify({
        'products': [directory.serialize_seller_product(p) for p in products],
        'count': len(products),
        'facets': directory.marketplace_facets(everything),
    })


@marketplace_bp.route('/mine', methods=['GET'])
@roles_required(User.ROLE_SELLER)
def my_listings():
    products = (
        SellerProduct.query
        .filter_by(seller_id=current_user.id)
        .order_by(SellerProduct.created_at.desc(), SellerProduct.id.desc())
        .all()
    )
    return jsonify([directory.serialize_seller_product(p) for p in products])


@marketplace_bp.route('/admin', methods=['GET'])
@admin_required
def admin_listings():
    query = SellerProduct.query
    status = (request.args.get('status') or '').strip()
    if status and status.lower() != 'all':
        query = query.filter(SellerProduct.status == status)
    products = query.order_by(SellerProduct.created_at.desc(), SellerProduct.id.desc()).all()
    return jsonify([directory.serialize_seller_product(p) for p in products])


@marketplace_bp.route('/inquiries', methods=['GET'])
@admin_required
def list_inquiries():
    return jsonify(queue_page(INQUIRY_QUEUE, SellerInquiry.to_dict))


@marketplace_bp.route('/inquiries/export', methods=['GET'])
@admin_required
def export_inquiries():
    return queue_export(INQUIRY_QUEUE)


@marketplace_bp.route('/inquiries/<int:inquiry_id>/status', methods=['PUT'])
@admin_required
def update_inquiry_status(inquiry_id):
    return queue_status_update(INQUIRY_QUEUE, inquiry_id, SellerInquiry.to_dict)


@marketplace_bp.route('/inquiries/<int:inquiry_id>', methods=['DELETE'])
@admin_required
def delete_inquiry(inquiry_id):
    return queue_delete(INQUIRY_QUEUE, inquiry_id)


@marketplace_bp.route('', methods=['POST'])
@roles_required(User.ROLE_SELLER)
def create_listing():
    form = SellerProductForm()
    if not form.validate():
        return validation_error(form)

    product = SellerProduct(seller_id=current_user.id)
    form.apply_to(product)
    if not current_user.is_admin or not product.status:
        product.status = SellerProduct.STATUS_PENDING
    db.session.add(product)
    commit_or_abort('create seller product')
    return jsonify(directory.serialize_seller_product(product)), 201


@marketplace_bp.route('/<int:product_id>', methods=['PUT'])
@roles_required(User.ROLE_SELLER)
def update_listing(product_id):
    product = _owned_or_404(product_id)
    if product is None:
        return jsonify({'message': 'You are not allowed to perform this action.'}), 403

    form = SellerProductForm()
    if not form.validate_partial():
        return validation_error(form)
    fields = list(form.provided)
    if 'status' in fields and not current_user.is_admin:
        fields.remove('status')
    form.apply_to(product, only=fields)
    commit_or_abort(f'update seller product #{product_id}')
    return jsonify(directory.serialize_seller_product(product))


@marketplace_bp.route('/<int:product_id>', methods=['DELETE'])
@roles_required(User.ROLE_SELLER)
def delete_listing(product_id):
    product = _owned_or_404(product_id)
    if product is None:
        return jsonify({'message': 'You are not allowed to perform this action.'}), 403
    db.session.delete(product)
    commit_or_abort(f'delete seller product #{product_id}')
    return jsonify({'message': 'Product removed', '_id': product_id})


@marketplace_bp.route('/<int:product_id>/inquiries', methods=['POST'])
@limiter.limit(lambda: current_app.config['SUBMISSION_RATE_LIMIT'])
def create_inquiry(product_id):
    product = get_or_404(SellerProduct, product_id, 'Product')
    if product.status != SellerProduct.STATUS_APPROVED:
        return jsonify({'message': 'Product not found'}), 404

    form = SellerInquiryForm()
    if not form.validate():
        return validation_error(form)

    inquiry = SellerInquiry(product_id=product.id)
    form.apply_to(inquiry)
    db.session.add(inquiry)
    commit_or_abort('save seller inquiry')

    seller = product.seller
    notify_admin(
        f"New Marketplace Inquiry - {product.name}",
        lead_lines('A buyer asked about a marketplace listing.', {
            'Product': product.name,
            'Seller': (seller.business_name or seller.name) if seller else None,
            'Name': inquiry.name,
            'Email': inquiry.email,
            'Phone': inquiry.phone,
            'Message': inquiry.message,
        }),
        reply_to=inquiry.email,
    )
    return jsonify({'message': 'Inquiry sent successfully!', 'inquiry': inquiry.to_dict()}), 201
