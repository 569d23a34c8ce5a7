"""
Contact routes - JSON API for contact form submissions
"""
from flask import Blueprint, request, jsonify, current_app
from logging_config import get_logger

logger = get_logger(__name__)

contact_bp = Blueprint('contact', __name__)

# Result error codes to HTTP status
ERROR_STATUS = {
    'VALIDATION_ERROR': 400,
    'CONSTRAINT_VIOLATION': 400,
    'NOT_FOUND': 404,
    'STORE_UNAVAILABLE': 503,
}


def _error_response(result):
    status = ERROR_STATUS.get(result.error_code, 500)
    if status == 500:
        return jsonify({'error': 'Internal server error'}), 500
    return jsonify({'error': result.error, 'code': result.error_code}), status


@contact_bp.route('/', methods=['GET'])
def list_contacts():
    """List contacts, optionally searched (?q=) or paginated (?page=&per_page=)"""
    contact_service = current_app.services.get('contact')

    if 'page' in request.args:
        result = contact_service.list_contacts_paginated(
            page=request.args.get('page', 1, type=int),
            per_page=request.args.get('per_page', 20, type=int)
        )
        if result.is_failure:
            return _error_response(result)
        return jsonify({
            'contacts': [contact_service.serialize_contact(c) for c in result.data],
            'total': result.total,
            'page': result.page,
            'per_page': result.per_page,
            'pages': result.total_pages
        })

    result = contact_service.list_contacts(search=request.args.get('q'))
    if result.is_failure:
        return _error_response(result)
    return jsonify({
        'contacts': [contact_service.serialize_contact(c) for c in result.data]
    })


@contact_bp.route('/', methods=['POST'])
def create_contact():
    """Store a contact form submission"""
    contact_service = current_app.services.get('contact')
    result = contact_service.submit_contact(request.get_json(silent=True))
    if result.is_failure:
        return _error_response(result)
    return jsonify({
        'success': True,
        'contact': contact_service.serialize_contact(result.data)
    }), 201


@contact_bp.route('/<int:contact_id>', methods=['GET'])
def get_contact(contact_id):
    contact_service = current_app.services.get('contact')
    result = contact_service.get_contact(contact_id)
    if result.is_failure:
        return _error_response(result)
    return jsonify({'contact': contact_service.serialize_contact(result.data)})


@contact_bp.route('/<int:contact_id>', methods=['PUT'])
def update_contact(contact_id):
    contact_service = current_app.services.get('contact')
    result = contact_service.update_contact(contact_id, request.get_json(silent=True))
    if result.is_failure:
        return _error_response(result)
    return jsonify({
        'success': True,
        'contact': contact_service.serialize_contact(result.data)
    })


@contact_bp.route('/<int:contact_id>', methods=['DELETE'])
def delete_contact(contact_id):
    """Soft-delete a contact"""
    contact_service = current_app.services.get('contact')
    result = contact_service.delete_contact(contact_id)
    if result.is_failure:
        return _error_response(result)
    return '', 204
