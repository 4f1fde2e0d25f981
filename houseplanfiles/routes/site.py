"""
Site Blueprint - contact form, static pages, chat widget state, the admin
media library and locally stored uploads.
"""

from flask import Blueprint, abort, current_app, jsonify, request, send_from_directory
from flask_login import current_user

from houseplanfiles.auth import admin_required, roles_required
from houseplanfiles.extensions import db, limiter
from houseplanfiles.forms import ContactForm
from houseplanfiles.models import ContactMessage, User
from houseplanfiles.routes.common import commit_or_abort, page_arg, validation_error
from houseplanfiles.services import chat_widget, content
from houseplanfiles.services.catalog import paginate
from houseplanfiles.services.media_library import media_query, media_row
from houseplanfiles.services.notifications import CONTACT_SUBJECT, lead_lines, notify_admin
from houseplanfiles.utils.media import absolute_media_url
from houseplanfiles.utils.uploads import save_uploaded_file


site_bp = Blueprint('site', __name__)


@site_bp.route('/api/contact', methods=['POST'])
@limiter.limit(lambda: current_app.config['SUBMISSION_RATE_LIMIT'])
def contact():
    form = ContactForm()
    if not form.validate():
        return validation_error(form)

    message = ContactMessage(
        name=form.name.data,
        email=form.email.data,
        subject=CONTACT_SUBJECT,
        message=form.message.data,
    )
    db.session.add(message)
    commit_or_abort('save contact message')

    sent = notify_admin(
        CONTACT_SUBJECT,
        lead_lines('You have a new message from the website contact form.', {
            'Name': message.name,
            'Email': message.email,
            'Message': message.message,
        }),
        reply_to=message.email,
    )
    message.email_status = ContactMessage.EMAIL_SENT if sent else ContactMessage.EMAIL_FAILED
    commit_or_abort('update contact message status')

    return jsonify({
        'message': 'Thank you for your message! We will get back to you soon.',
        'emailSent': sent,
    }), 201


@site_bp.route('/api/pages/<slug>', methods=['GET'])
def static_page(slug):
    page = content.get_page(slug)
    if page is None:
        abort(404, description='Page not found')
    return jsonify(page)


@site_bp.route('/api/widget/chat', methods=['GET'])
def chat_widget_state():
    cfg = current_app.config
    closed_at = chat_widget.parse_closed_at(request.cookies.get(cfg['CHAT_WIDGET_COOKIE']))
    return jsonify(chat_widget.widget_state(
        cfg['CHAT_WIDGET_ID'], closed_at, cfg['CHAT_WIDGET_COOLDOWN_SECONDS'],
    ))


@site_bp.route('/api/widget/chat/dismiss', methods=['POST'])
def dismiss_chat_widget():
    cfg = current_app.config
    closed_at = chat_widget.current_ms()
    response = jsonify(chat_widget.widget_state(
        cfg['CHAT_WIDGET_ID'], closed_at, cfg['CHAT_WIDGET_COOLDOWN_SECONDS'], now_ms=closed_at,
    ))
    chat_widget.dismiss(response, cfg['CHAT_WIDGET_COOKIE'], cfg['CHAT_WIDGET_COOLDOWN_SECONDS'], now_ms=closed_at)
    return response


@site_bp.route('/api/media', methods=['GET'])
@admin_required
def media_library():
    result = paginate(
        media_query(request.args.get('searchTerm', '')),
        page_arg('pageNumber'),
        current_app.config['MEDIA_PER_PAGE'],
    )
    return jsonify({
        'media': [media_row(p) for p in result['items']],
        'page': result['page'],
        'pages': result['pages'],
        'count': result['count'],
    })


@site_bp.route('/api/media/upload', methods=['POST'])
@roles_required(*User.PUBLISHER_ROLES)
def upload_media():
    folder = 'plans' if request.form.get('kind') == 'plan' else 'images'
    try:
        stored = save_uploaded_file(request.files.get('file'), folder)
    except ValueError as exc:
        return jsonify({'message': str(exc)}), 400
    if not stored:
        return jsonify({'message': 'No file uploaded'}), 400

    current_app.logger.info('User %s uploaded %s', current_user.id, stored)
    return jsonify({'url': stored, 'absoluteUrl': absolute_media_url(stored)}), 201


@site_bp.route('/uploads/<path:filename>', methods=['GET'])
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
