"""
Products Blueprint - house plan catalog, owner/admin management and reviews.
"""

from flask import Blueprint, abort, current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy import func

from houseplanfiles.auth import admin_required, roles_required
from houseplanfiles.extensions import db
from houseplanfiles.forms import ProductForm, ReviewForm
from houseplanfiles.models import Order, Product, Review, User
from houseplanfiles.routes.common import commit_or_abort, get_or_404, page_arg, validation_error
from houseplanfiles.services import catalog
from houseplanfiles.services.pricing import current_currency


products_bp = Blueprint('products', __name__)

MAX_PAGE_SIZE = 100


def _viewer():
    return current_user if current_user.is_authenticated else None


def _can_manage(product):
    user = _viewer()
    return user is not None and (user.is_admin or product.user_id == user.id)


def _page_payload(result):
    currency = current_currency()
    purchased = catalog.purchased_product_ids(_viewer())
    return {
        'products': [catalog.serialize_product(p, currency, purchased) for p in result['items']],
        'page': result['page'],
        'pages': result['pages'],
        'count': result['count'],
    }


def _detail(product):
    if product.status != Product.STATUS_PUBLISHED and not _can_manage(product):
        abort(404, description='Product not found')
    payload = catalog.serialize_product(product, current_currency(), catalog.purchased_product_ids(_viewer()))
    payload['reviews'] = [r.to_dict() for r in sorted(product.reviews, key=lambda r: r.created_at, reverse=True)]
    return jsonify(payload)


@products_bp.route('', methods=['GET'])
def list_products():
    per_page = request.args.get('limit', current_app.config['PRODUCTS_PER_PAGE'], type=int) or 1
    per_page = min(max(per_page, 1), MAX_PAGE_SIZE)
    filters = catalog.ProductFilters.from_args(request.args)
    result = catalog.paginate(catalog.build_products_query(filters), page_arg(), per_page)
    return jsonify(_page_payload(result))


@products_bp.route('/home', methods=['GET'])
def home_products():
    cards = catalog.home_floor_plans(
        current_app.config['HOME_FLOOR_PLANS_LIMIT'],
        current_currency(),
        catalog.purchased_product_ids(_viewer()),
    )
    return jsonify({'products': cards})


@products_bp.route('/myproducts', methods=['GET'])
@roles_required(User.ROLE_SELLER, User.ROLE_PROFESSIONAL)
def my_products():
    filters = catalog.ProductFilters.from_args(
        request.args,
        owner_id=current_user.id,
        status=request.args.get('status') or 'all',
    )
    result = catalog.paginate(
        catalog.build_products_query(filters), page_arg(), current_app.config['ADMIN_PRODUCTS_PER_PAGE'],
    )
    return jsonify(_page_payload(result))


@products_bp.route('/dashboard', methods=['GET'])
@roles_required(User.ROLE_SELLER, User.ROLE_PROFESSIONAL)
def dashboard():
    counts = catalog.status_counts(current_user.id)
    orders = (
        db.session.query(func.count(Order.id))
        .join(Product, Order.product_id == Product.id)
        .filter(Product.user_id == current_user.id, Order.is_paid.is_(True))
        .scalar()
    )
    return jsonify({
        'totalProducts': sum(counts.values()),
        'statusCounts': counts,
        'orders': orders or 0,
    })


@products_bp.route('/admin', methods=['GET'])
@admin_required
def admin_products():
    filters = catalog.ProductFilters.from_args(request.args, status=request.args.get('status') or 'all')
    result = catalog.paginate(
        catalog.build_products_query(filters), page_arg(), current_app.config['ADMIN_PRODUCTS_PER_PAGE'],
    )
    return jsonify(_page_payload(result))


@products_bp.route('/slug/<string:slug>', methods=['GET'])
def product_by_slug(slug):
    product = catalog.find_by_slug(slug)
    if product is None:
        abort(404, description='Product not found')
    return _detail(product)


@products_bp.route('/<int:product_id>', methods=['GET'])
def product_detail(product_id):
    return _detail(get_or_404(Product, product_id, 'Product'))


@products_bp.route('', methods=['POST'])
@roles_required(*User.PUBLISHER_ROLES)
def create_product():
    form = ProductForm()
    if not form.validate():
        return validation_error(form)

    product = Product(name=form.name.data)
    form.apply_to(product)
    product.user_id = current_user.id
    if not current_user.is_admin:
        product.status = Product.STATUS_PENDING
    elif not product.status:
        product.status = Product.STATUS_PUBLISHED

    db.session.add(product)
    commit_or_abort('create product')
    current_app.logger.info('Product %s created by user %s (%s)', product.id, current_user.id, product.status)
    return jsonify(catalog.serialize_product(product, current_currency())), 201


@products_bp.route('/<int:product_id>', methods=['PUT'])
@login_required
def update_product(product_id):
    product = get_or_404(Product, product_id, 'Product')
    if not _can_manage(product):
        return jsonify({'message': 'You are not allowed to perform this action.'}), 403

    form = ProductForm()
    if not form.validate_partial():
        return validation_error(form)

    fields = form.provided
    if not current_user.is_admin:
        fields = [name for name in fields if name != 'status']
    form.apply_to(product, only=fields)
    commit_or_abort(f'update product #{product_id}')
    return jsonify(catalog.serialize_product(product, current_currency()))


@products_bp.route('/<int:product_id>', methods=['DELETE'])
@login_required
def delete_product(product_id):
    product = get_or_404(Product, product_id, 'Product')
    if not _can_manage(product):
        return jsonify({'message': 'You are not allowed to perform this action.'}), 403
    db.session.delete(product)
    commit_or_abort(f'delete product #{product_id}')
    return jsonify({'message': 'Product removed', '_id': product_id})


@products_bp.route('/<int:product_id>/reviews', methods=['POST'])
@login_required
def create_review(product_id):
    product = get_or_404(Product, product_id, 'Product')
    form = ReviewForm()
    if not form.validate():
        return validation_error(form)

    if Review.query.filter_by(product_id=product.id, user_id=current_user.id).first():
        return jsonify({'message': 'Product already reviewed'}), 400

    review = Review(
        product_id=product.id,
        user_id=current_user.id,
        name=current_user.name,
        rating=form.rating.data,
        comment=form.comment.data.strip(),
    )
    product.reviews.append(review)
    product.recalculate_rating()
    commit_or_abort(f'add review to product #{product_id}')
    return jsonify({
        'message': 'Review added',
        'review': review.to_dict(),
        'rating': product.rating,
        'numReviews': product.num_reviews,
    }), 201


@products_bp.route('/<int:product_id>/csv-image', methods=['DELETE'])
@login_required
def remove_csv_image(product_id):
    product = get_or_404(Product, product_id, 'Product')
    if not _can_manage(product):
        return jsonify({'message': 'You are not allowed to perform this action.'}), 403

    payload = request.get_json(silent=True) or {}
    image_url = payload.get('imageUrl') or request.args.get('imageUrl')
    if not image_url:
        return jsonify({'message': 'imageUrl is required'}), 400
    if not catalog.remove_image(product, image_url):
        return jsonify({'message': 'Image not found on this product'}), 404

    commit_or_abort(f'remove image from product #{product_id}')
    return jsonify(catalog.serialize_product(product, current_currency()))
