"""Blog Blueprint - published articles and admin editing."""

from flask import Blueprint, abort, current_app, jsonify, request
from sqlalchemy import or_

from houseplanfiles.auth import admin_required
from houseplanfiles.extensions import db
from houseplanfiles.forms import BlogPostForm
from houseplanfiles.models import BlogPost
from houseplanfiles.routes.common import commit_or_abort, get_or_404, page_arg, validation_error
from houseplanfiles.services.catalog import paginate
from houseplanfiles.services.share_pages import clean_description
from houseplanfiles.utils.media import absolute_media_url


blog_bp = Blueprint('blog', __name__)

LISTING_TITLE = 'Our Blog - Latest House Plans & Design Insights | HousePlanFiles'
LISTING_DESCRIPTION = (
    'Explore the HousePlanFiles blog for the latest trends in house plans, '
    'architectural designs, interior decoration and construction tips.'
)


def _serialize(post, full=True):
    payload = {
        '_id': post.id,
        'title': post.title,
        'slug': post.slug,
        'excerpt': post.excerpt or clean_description(post.content),
        'mainImage': post.main_image,
        'tags': post.tags or [],
        'author': post.author,
        'status': post.status,
        'metaTitle': post.meta_title,
        'metaDescription': post.meta_description,
        'createdAt': post.created_at.isoformat() if post.created_at else None,
        'updatedAt': post.updated_at.isoformat() if post.updated_at else None,
    }
    if full:
        payload['content'] = post.content
    return payload


def _og_image(post=None):
    return absolute_media_url(post.main_image if post else None, current_app.config['DEFAULT_BLOG_IMAGE'])


@blog_bp.route('', methods=['GET'])
def list_posts():
    query = BlogPost.query.filter_by(status=BlogPost.STATUS_PUBLISHED)
    search = (request.args.get('search') or '').strip()
    if search:
        like = f"%{search}%"
        query = query.filter(or_(BlogPost.title.ilike(like), BlogPost.content.ilike(like)))
    query = query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc())

    result = paginate(query, page_arg(), current_app.config['BLOGS_PER_PAGE'])
    posts = result['items']
    return jsonify({
        'posts': [_serialize(p, full=False) for p in posts],
        'page': result['page'],
        'pages': result['pages'],
        'count': result['count'],
        'meta': {
            'title': LISTING_TITLE,
            'description': LISTING_DESCRIPTION,
            'ogImage': _og_image(posts[0] if posts else None),
        },
    })


@blog_bp.route('/slug/<slug>', methods=['GET'])
def post_by_slug(slug):
    post = BlogPost.query.filter_by(slug=slug, status=BlogPost.STATUS_PUBLISHED).first()
    if post is None:
        abort(404, description='Post not found')
    payload = _serialize(post)
    payload['meta'] = {
        'title': post.meta_title or f"{post.title} | {current_app.config['SITE_NAME']}",
        'description': clean_description(post.meta_description or post.excerpt or post.content),
        'ogImage': _og_image(post),
    }
    return jsonify(payload)


@blog_bp.route('/admin', methods=['GET'])
@admin_required
def admin_posts():
    posts = BlogPost.query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc()).all()
    return jsonify([_serialize(p, full=False) for p in posts])


@blog_bp.route('/<int:post_id>', methods=['GET'])
@admin_required
def post_detail(post_id):
    return jsonify(_serialize(get_or_404(BlogPost, post_id, 'Post')))


@blog_bp.route('', methods=['POST'])
@admin_required
def create_post():
    form = BlogPostForm()
    if not form.validate():
        return validation_error(form)
    post = BlogPost(title=form.title.data)
    form.apply_to(post)
    db.session.add(post)
    commit_or_abort('create blog post')
    return jsonify(_serialize(post)), 201


@blog_bp.route('/<int:post_id>', methods=['PUT'])
@admin_required
def update_post(post_id):
    post = get_or_404(BlogPost, post_id, 'Post')
    form = BlogPostForm()
    if not form.validate_partial():
        return validation_error(form)
    form.apply_to(post, only=form.provided)
    commit_or_abort(f'update blog post #{post_id}')
    return jsonify(_serialize(post))


@blog_bp.route('/<int:post_id>', methods=['DELETE'])
@admin_required
def delete_post(post_id):
    post = get_or_404(BlogPost, post_id, 'Post')
    db.session.delete(post)
    commit_or_abort(f'delete blog post #{post_id}')
    return jsonify({'message': 'Post removed', '_id': post_id})
