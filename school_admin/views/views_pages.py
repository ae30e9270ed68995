import logging

from django.shortcuts import render

from ..models import GradeLevel, SchoolYear, Section
from .views_utils import admin_required, get_section_context
from ..screens.archive_browser import ArchiveBrowser, TabSelection, EMPTY_ARCHIVES_MESSAGE
from ..utils.archive_utils import build_archives_data

logger = logging.getLogger(__name__)


@admin_required
def dashboard_view(request):
    """Landing page with record counts and links to the admin screens."""
    context = {
        'section_count': Section.objects.count(),
        'grade_level_count': GradeLevel.objects.count(),
        'archived_year_count': SchoolYear.objects.filter(is_active=False).count(),
        'active_year': SchoolYear.objects.filter(is_active=True).first(),
    }
    return render(request, 'school_admin/dashboard.html', context)


@admin_required
def archives_view(request):
    """
    Archived school years browser.

    The open tab comes from ``?year=<id>&tab=<kind>``; each tab button links
    to the selection a click would produce, so clicking the open tab closes it.
    """
    archives_data = build_archives_data()
    selection = TabSelection.from_query(request.GET.get('year'), request.GET.get('tab'))
    browser = ArchiveBrowser(archives_data, selection)

    context = {
        'browser': browser,
        'panels': browser.panels(),
        'archives_data': archives_data,
        'empty_message': EMPTY_ARCHIVES_MESSAGE,
    }
    return render(request, 'school_admin/archives.html', context)


@admin_required
def sections_view(request):
    """
    Section manager page. ``?edit=<id>`` renders that row with inputs
    pre-filled from its current values.
    """
    sections = Section.objects.all().ordered()
    grade_levels = sorted(GradeLevel.objects.all(), key=lambda g: (g.grade_number, g.name))

    editing_id = None
    edit_param = request.GET.get('edit')
    if edit_param:
        try:
            editing_id = int(edit_param)
        except ValueError:
            logger.debug(f"Ignoring invalid edit id: {edit_param!r}")

    context = get_section_context(sections, grade_levels, editing_id)
    context.update({
        'sections_payload': [s.to_payload() for s in sections],
        'grade_levels_payload': [g.to_payload() for g in grade_levels],
    })
    return render(request, 'school_admin/sections.html', context)
