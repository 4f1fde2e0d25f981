"""
Gallery Blueprint - gallery items, grouped pages and watermarked previews.
"""

from flask import Blueprint, Response, current_app, jsonify, request

from houseplanfiles.auth import admin_required
from houseplanfiles.domain import gallery as gallery_rules
from houseplanfiles.extensions import db
from houseplanfiles.forms import GalleryItemForm
from houseplanfiles.models import GalleryItem
from houseplanfiles.routes.common import commit_or_abort, get_or_404, validation_error
from houseplanfiles.services.gallery_preview import PreviewError, build_preview
from houseplanfiles.utils.ttl_cache import TTLCache
from houseplanfiles.utils.uploads import save_uploaded_file


gallery_bp = Blueprint('gallery', __name__)

# The "Video" tab opens the walkthrough page instead of filtering items.
VIDEO_TAB_PATH = '/customize/3d-video-walkthrough'
IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'webp', 'gif'}


def _preview_cache():
    cache = current_app.extensions.get('gallery_preview_cache')
    if cache is None:
        cache = current_app.extensions['gallery_preview_cache'] = TTLCache(ttl_seconds=60 * 60, max_items=256)
    return cache


def _all_items():
    return GalleryItem.query.order_by(GalleryItem.created_at.desc(), GalleryItem.id.desc()).all()


def _serialize_group(group):
    return {
        'key': group.key,
        'title': group.title,
        'count': len(group.items),
        'cover': group.cover.to_dict() if group.cover else None,
        'items': [item.to_dict() for item in group.items],
    }


@gallery_bp.route('', methods=['GET'])
def list_gallery():
    return jsonify([item.to_dict() for item in _all_items()])


@gallery_bp.route('/groups', methods=['GET'])
def gallery_groups():
    items = _all_items()
    category = (request.args.get('category') or gallery_rules.ALL_CATEGORY).strip()
    groups = gallery_rules.group_by_title(gallery_rules.filter_by_category(items, category))
    try:
        page = gallery_rules.paginate_groups(
            groups, request.args.get('page', 1, type=int), current_app.config['GALLERY_GROUPS_PER_PAGE'],
        )
    except gallery_rules.PageOutOfRange as exc:
        return jsonify({'message': str(exc)}), 400

    return jsonify({
        'categories': gallery_rules.categories(items),
        'category': category,
        'videoPath': VIDEO_TAB_PATH,
        'groups': [_serialize_group(g) for g in page.groups],
        'page': page.page,
        'pages': page.pages,
        'total': page.total,
    })


@gallery_bp.route('/<int:item_id>/preview', methods=['GET'])
def gallery_preview(item_id):
    item = get_or_404(GalleryItem, item_id, 'Gallery item')
    key = (item.id, item.image_url)
    preview = _preview_cache().get(key)
    if preview is None:
        try:
            preview = build_preview(item.image_url, current_app.config['UPLOAD_FOLDER'])
        except PreviewError as exc:
            current_app.logger.warning('Gallery preview failed for item %s: %s', item_id, exc)
            return jsonify({'message': 'Preview unavailable'}), 502
        _preview_cache().set(key, preview)

    response = Response(preview.data, mimetype=preview.mimetype)
    response.headers['Cache-Control'] = 'public, max-age=3600'
    return response


@gallery_bp.route('', methods=['POST'])
@admin_required
def create_gallery_item():
    form = GalleryItemForm()
    if not form.validate():
        return validation_error(form)

    image_url = form.imageUrl.data
    if form.image.data:
        try:
            image_url = save_uploaded_file(form.image.data, 'gallery', IMAGE_EXTENSIONS)
        except ValueError as exc:
            return jsonify({'message': str(exc)}), 400
    if not image_url:
        return jsonify({'message': 'Please upload an image or provide an image URL.'}), 400

    item = GalleryItem(
        title=form.title.data,
        category=form.category.data or None,
        image_url=image_url,
        alt_text=form.altText.data or None,
    )
    db.session.add(item)
    commit_or_abort('create gallery item')
    return jsonify(item.to_dict()), 201


@gallery_bp.route('/<int:item_id>', methods=['DELETE'])
@admin_required
def delete_gallery_item(item_id):
    item = get_or_404(GalleryItem, item_id, 'Gallery item')
    cache_key = (item.id, item.image_url)
    db.session.delete(item)
    commit_or_abort(f'delete gallery item #{item_id}')
    _preview_cache().pop(cache_key)
    return jsonify({'message': 'Gallery item removed', '_id': item_id})
