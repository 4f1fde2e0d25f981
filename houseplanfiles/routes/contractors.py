"""
Contractors Blueprint - City Partner directory, admin CRUD and inquiries.
"""

from flask import Blueprint, current_app, jsonify, request

from houseplanfiles.auth import admin_required
from houseplanfiles.extensions import db, limiter
from houseplanfiles.forms import ContractorForm, ContractorInquiryForm
from houseplanfiles.models import Contractor, ContractorInquiry
from houseplanfiles.routes.common import (
    commit_or_abort,
    get_or_404,
    queue_delete,
    queue_export,
    queue_page,
    queue_status_update,
    validation_error,
)
from houseplanfiles.services.directory import PROFESSION_ALL, public_contractors_query, serialize_contractor
from houseplanfiles.services.notifications import lead_lines, notify_admin


contractors_bp = Blueprint('contractors', __name__)

INQUIRY_QUEUE = 'contractor-inquiries'


@contractors_bp.route('', methods=['GET'])
def public_directory():
    contractors = public_contractors_query(
        city=request.args.get('city', ''),
        profession=request.args.get('profession', PROFESSION_ALL),
    ).all()
    return jsonify({
        'contractors': [serialize_contractor(c) for c in contractors],
        'count': len(contractors),
    })


@contractors_bp.route('/all', methods=['GET'])
@admin_required
def all_contractors():
    query = Contractor.query
    status = (request.args.get('status') or '').strip()
    if status and status.lower() != 'all':
        query = query.filter(Contractor.status == status)
    contractors = query.order_by(Contractor.created_at.desc(), Contractor.id.desc()).all()
    return jsonify({'contractors': [serialize_contractor(c) for c in contractors]})


@contractors_bp.route('/inquiries', methods=['GET'])
@admin_required
def list_inquiries():
    return jsonify(queue_page(INQUIRY_QUEUE, ContractorInquiry.to_dict))


@contractors_bp.route('/inquiries/export', methods=['GET'])
@admin_required
def export_inquiries():
    return queue_export(INQUIRY_QUEUE)


@contractors_bp.route('/inquiries/<int:inquiry_id>/status', methods=['PUT'])
@admin_required
def update_inquiry_status(inquiry_id):
    return queue_status_update(INQUIRY_QUEUE, inquiry_id, ContractorInquiry.to_dict)


@contractors_bp.route('/inquiries/<int:inquiry_id>', methods=['DELETE'])
@admin_required
def delete_inquiry(inquiry_id):
    return queue_delete(INQUIRY_QUEUE, inquiry_id)


@contractors_bp.route('/<int:contractor_id>', methods=['GET'])
def contractor_detail(contractor_id):
    contractor = get_or_404(Contractor, contractor_id, 'Contractor')
    if contractor.status != Contractor.STATUS_APPROVED:
        return jsonify({'message': 'Contractor not found'}), 404
    return jsonify(serialize_contractor(contractor))


@contractors_bp.route('', methods=['POST'])
@admin_required
def create_contractor():
    form = ContractorForm()
    if not form.validate():
        return validation_error(form)
    contractor = Contractor()
    form.apply_to(contractor)
    db.session.add(contractor)
    commit_or_abort('create contractor')
    return jsonify(serialize_contractor(contractor)), 201


@contractors_bp.route('/<int:contractor_id>', methods=['PUT'])
@admin_required
def update_contractor(contractor_id):
    contractor = get_or_404(Contractor, contractor_id, 'Contractor')
    form = ContractorForm()
    if not form.validate_partial():
        return validation_error(form)
    form.apply_to(contractor, only=form.provided)
    commit_or_abort(f'update contractor #{contractor_id}')
    return jsonify(serialize_contractor(contractor))


@contractors_bp.route('/<int:contractor_id>', methods=['DELETE'])
@admin_required
def delete_contractor(contractor_id):
    contractor = get_or_404(Contractor, contractor_id, 'Contractor')
    db.session.delete(contractor)
    commit_or_abort(f'delete contractor #{contractor_id}')
    return jsonify({'message': 'Contractor removed', '_id': contractor_id})


@contractors_bp.route('/<int:contractor_id>/inquiries', methods=['POST'])
@limiter.limit(lambda: current_app.config['SUBMISSION_RATE_LIMIT'])
def create_inquiry(contractor_id):
    contractor = get_or_404(Contractor, contractor_id, 'Contractor')
    if contractor.status != Contractor.STATUS_APPROVED:
        return jsonify({'message': 'Contractor not found'}), 404

    form = ContractorInquiryForm()
    if not form.validate():
        return validation_error(form)

    inquiry = ContractorInquiry(contractor_id=contractor.id)
    form.apply_to(inquiry)
    db.session.add(inquiry)
    commit_or_abort('save contractor inquiry')

    notify_admin(
        f"New City Partner Inquiry - {contractor.name}",
        lead_lines('A visitor contacted a City Partner.', {
            'Partner': f"{contractor.name} ({contractor.city or 'N/A'})",
            'Name': inquiry.sender_name,
            'Email': inquiry.sender_email,
            'WhatsApp': inquiry.sender_whatsapp,
            'Requirements': inquiry.requirements,
        }),
        reply_to=inquiry.sender_email,
    )
    return jsonify({'message': 'Inquiry sent successfully!', 'inquiry': inquiry.to_dict()}), 201
