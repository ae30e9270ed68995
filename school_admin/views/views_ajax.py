import logging

from django.contrib import messages
from django.db import IntegrityError, transaction as db_transaction
from django.http import JsonResponse
from django.shortcuts import redirect
from django.utils.translation import gettext_lazy as _
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from ..forms import SectionForm, SectionUpdateForm, flatten_errors, DUPLICATE_SECTION_ERROR
from ..models import Section
from ..security_logger import SecurityLogger
from .views_utils import admin_required, wants_json, get_request_data

logger = logging.getLogger(__name__)

# Details stay in the log; clients only get this
SERVER_ERROR_MESSAGE = _('A server error occurred.')


def _section_not_found(request, section_id):
    if wants_json(request):
        return JsonResponse({'error': _('Section not found.')}, status=404)
    messages.error(request, _('Section not found.'))
    return redirect('sections')


def _invalid_section(request, form):
    """422 with the field error map, or back to the page with the first error as a flash message."""
    errors = flatten_errors(form)
    if wants_json(request):
        payload = {'errors': errors}
        if 'error' in errors:
            payload['error'] = errors['error']
        return JsonResponse(payload, status=422)
    for message in errors.values():
        messages.error(request, message)
    return redirect('sections')


@admin_required
@require_GET
def list_sections_ajax(request):
    """Sections ordered by grade number, then by section name."""
    sections = Section.objects.all().ordered()
    return JsonResponse({'sections': [s.to_payload() for s in sections]})


@admin_required
@require_POST
def store_section(request):
    """Creates a Section from {name, grade_level_id}."""
    try:
        data = get_request_data(request)
    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)

    form = SectionForm(data)
    if not form.is_valid():
        return _invalid_section(request, form)

    try:
        with db_transaction.atomic():
            section = form.save()
    except IntegrityError:
        # Lost a race with another admin creating the same section
        form.add_error(None, DUPLICATE_SECTION_ERROR)
        return _invalid_section(request, form)
    except Exception as e:
        logger.error(f"Error creating section: {e}", exc_info=True)
        return JsonResponse({'error': SERVER_ERROR_MESSAGE}, status=500)

    SecurityLogger.log_section_change(
        'create', section.id, request.user.username,
        f"name={section.name}, grade_level_id={section.grade_level_id}"
    )

    if wants_json(request):
        return JsonResponse({
            'message': _('Section added successfully'),
            'section': section.to_payload(),
        })
    messages.success(request, _('Section added successfully!'))
    return redirect('sections')


@admin_required
@require_http_methods(['PUT', 'PATCH'])
def update_section(request, section_id):
    """
    Updates a Section. Reached with a real PUT or with POST + ``_method=PUT``.

    Concurrent edits from two sessions are last-write-wins.
    """
    section = Section.objects.select_related('grade_level').filter(id=section_id).first()
    if section is None:
        return _section_not_found(request, section_id)

    try:
        data = get_request_data(request)
    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)

    form = SectionUpdateForm(data, instance=section)
    if not form.is_valid():
        return _invalid_section(request, form)

    try:
        with db_transaction.atomic():
            section = form.save()
    except IntegrityError:
        form.add_error(None, DUPLICATE_SECTION_ERROR)
        return _invalid_section(request, form)
    except Exception as e:
        logger.error(f"Error updating section {section_id}: {e}", exc_info=True)
        return JsonResponse({'error': SERVER_ERROR_MESSAGE}, status=500)

    SecurityLogger.log_section_change(
        'update', section.id, request.user.username,
        f"name={section.name}, grade_level_id={section.grade_level_id}"
    )

    if wants_json(request):
        return JsonResponse({
            'message': _('Section updated successfully'),
            'section': section.to_payload(),
        })
    messages.success(request, _('Section updated successfully!'))
    return redirect('sections')


@admin_required
@require_http_methods(['DELETE'])
def delete_section(request, section_id):
    """Deletes a Section. The anti-forgery token arrives in the X-CSRF-TOKEN header."""
    section = Section.objects.filter(id=section_id).first()
    if section is None:
        return _section_not_found(request, section_id)

    try:
        section.delete()
    except Exception as e:
        logger.error(f"Error deleting section {section_id}: {e}", exc_info=True)
        return JsonResponse({'error': SERVER_ERROR_MESSAGE}, status=500)

    SecurityLogger.log_section_change('delete', section_id, request.user.username)

    if wants_json(request):
        return JsonResponse({'message': _('Section deleted successfully')})
    messages.success(request, _('Section has been deleted.'))
    return redirect('sections')
