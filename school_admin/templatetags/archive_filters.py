# school_admin/templatetags/archive_filters.py

from django import template

register = template.Library()


@register.filter
def query_for(selection):
    """
    Query string that selects an archive tab ("year=3&tab=payments").
    An empty string closes every tab.
    """
    if selection is None:
        return ''
    return f"year={selection.school_year_id}&tab={selection.tab_kind}"
