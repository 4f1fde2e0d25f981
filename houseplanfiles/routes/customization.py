"""
Customization Requests Blueprint

Public submission of floor plan, elevation, interior and walkthrough
customization leads, plus the admin queue.
"""

from flask import Blueprint, current_app, jsonify

from houseplanfiles.auth import admin_required
from houseplanfiles.extensions import db, limiter
from houseplanfiles.forms import CustomizationRequestForm, StatusForm
from houseplanfiles.models import CustomizationRequest
from houseplanfiles.routes.common import (
    commit_or_abort,
    get_or_404,
    queue_delete,
    queue_export,
    queue_page,
    validation_error,
)
from houseplanfiles.services.admin_lists import distinct_values
from houseplanfiles.services.notifications import lead_lines, notify_admin
from houseplanfiles.utils.uploads import save_uploaded_file


customization_bp = Blueprint('customization', __name__)

QUEUE = 'customization'
REFERENCE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'webp', 'pdf', 'dwg'}


@customization_bp.route('', methods=['POST'])
@limiter.limit(lambda: current_app.config['SUBMISSION_RATE_LIMIT'])
def create_request():
    form = CustomizationRequestForm()
    if not form.validate():
        return validation_error(form)

    reference = None
    if form.referenceFile.data:
        try:
            reference = save_uploaded_file(form.referenceFile.data, 'customization', REFERENCE_EXTENSIONS)
        except ValueError as exc:
            return jsonify({'message': str(exc)}), 400

    lead = CustomizationRequest(reference_file=reference)
    form.apply_to(lead)
    lead.status = CustomizationRequest.STATUS_PENDING
    db.session.add(lead)
    commit_or_abort('save customization request')

    notify_admin(
        f"New {lead.request_type} Request - HousePlanFiles",
        lead_lines('A new customization request was submitted.', {
            'Request type': lead.request_type,
            'Name': lead.name,
            'Email': lead.email,
            'WhatsApp': lead.whatsapp_number,
            'Country': lead.country_name,
            'Details': lead.summary,
            'Reference file': lead.reference_file,
        }),
        reply_to=lead.email,
    )
    return jsonify({
        'message': 'Your request has been submitted successfully!',
        'request': lead.to_dict(),
    }), 201


@customization_bp.route('', methods=['GET'])
@admin_required
def list_requests():
    payload = queue_page(QUEUE, CustomizationRequest.to_dict)
    payload['filters'] = {
        'types': list(CustomizationRequest.TYPE_CHOICES),
        'statuses': list(CustomizationRequest.STATUS_CHOICES),
        'countries': distinct_values(CustomizationRequest.country_name, CustomizationRequest.query),
    }
    return jsonify(payload)


@customization_bp.route('/export', methods=['GET'])
@admin_required
def export_requests():
    return queue_export(QUEUE)


@customization_bp.route('/<int:request_id>', methods=['GET'])
@admin_required
def request_detail(request_id):
    return jsonify(get_or_404(CustomizationRequest, request_id, 'Request').to_dict())


@customization_bp.route('/<int:request_id>', methods=['PUT'])
@admin_required
def update_request(request_id):
    lead = get_or_404(CustomizationRequest, request_id, 'Request')

    status_form = StatusForm()
    if status_form.status.raw_data:
        status = status_form.status.data
        if status not in CustomizationRequest.STATUS_CHOICES:
            return jsonify({'message': f'Invalid status. Allowed: {", ".join(CustomizationRequest.STATUS_CHOICES)}'}), 400
        lead.status = status

    form = CustomizationRequestForm()
    if not form.validate_partial():
        return validation_error(form)
    form.apply_to(lead, only=form.provided)

    commit_or_abort(f'update customization request #{request_id}')
    return jsonify(lead.to_dict())


@customization_bp.route('/<int:request_id>', methods=['DELETE'])
@admin_required
def delete_request(request_id):
    return queue_delete(QUEUE, request_id)
