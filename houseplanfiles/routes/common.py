"""Helpers shared by the API blueprints."""

from __future__ import annotations

from flask import abort, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from houseplanfiles.extensions import db
from houseplanfiles.forms import StatusForm
from houseplanfiles.services import admin_lists
from houseplanfiles.services.exports import export_response


def validation_error(form):
    return jsonify({'message': form.first_error(), 'errors': form.errors}), 400


def get_or_404(model, object_id, label='Resource'):
    obj = db.session.get(model, object_id)
    if obj is None:
        abort(404, description=f'{label} not found')
    return obj


def commit_or_abort(action: str):
    """Commit the session; on failure roll back, log and answer 500."""
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception('Failed to %s: %s', action, exc)
        abort(500, description=f'Could not {action}. Please try again.')


def page_arg(name='page') -> int:
    return max(1, request.args.get(name, 1, type=int) or 1)


def queue_page(name: str, serialize) -> dict:
    filters = admin_lists.ListFilters.from_args(
        request.args, per_page=current_app.config['ADMIN_LIST_PER_PAGE'],
    )
    result = admin_lists.list_queue(name, filters)
    return {
        'items': [serialize(item) for item in result['items']],
        'page': result['page'],
        'pages': result['pages'],
        'total': result['total'],
        'hasNext': result['hasNext'],
    }


def queue_export(name: str):
    filters = admin_lists.ListFilters.from_args(request.args)
    fmt = (request.args.get('format') or 'csv').lower()
    return export_response(name, admin_lists.all_rows(name, filters), fmt)


def queue_status_update(name: str, object_id: int, serialize):
    model = admin_lists.QUEUES[name].model
    record = get_or_404(model, object_id, 'Request')
    form = StatusForm()
    if not form.validate():
        return validation_error(form)
    try:
        updated = admin_lists.update_status(record, form.status.data, model.STATUS_CHOICES)
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception('Failed to update %s #%s status: %s', name, object_id, exc)
        abort(500, description='Could not update status. Please try again.')
    if not updated:
        return jsonify({'message': f'Invalid status. Allowed: {", ".join(model.STATUS_CHOICES)}'}), 400
    return jsonify(serialize(record))


def queue_delete(name: str, object_id: int):
    record = get_or_404(admin_lists.QUEUES[name].model, object_id, 'Request')
    db.session.delete(record)
    commit_or_abort(f'delete {name} #{object_id}')
    return jsonify({'message': 'Request deleted successfully.', '_id': object_id})
