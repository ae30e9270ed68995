"""
Archived school years browser.

Read-only view over archive groups supplied with the page. The only UI
state is which tab is open: a single optional (school year, tab kind)
selection shared by the whole page, so opening a tab in one group closes
whatever was open in another.
"""

from dataclasses import dataclass
from typing import Optional

from ..utils.format_utils import format_currency, format_date

STUDENTS = 'students'
PAYMENTS = 'payments'
DONATIONS = 'donations'

TABS = (
    (STUDENTS, 'Students'),
    (PAYMENTS, 'Payments'),
    (DONATIONS, 'Donations'),
)
TAB_KINDS = tuple(kind for kind, _label in TABS)

EMPTY_ARCHIVES_MESSAGE = 'No archived school years found.'
EMPTY_TAB_MESSAGES = {
    STUDENTS: 'No students',
    PAYMENTS: 'No payments',
    DONATIONS: 'No donations',
}
UNKNOWN_STUDENT = 'Unknown Student'


@dataclass(frozen=True)
class TabSelection:
    school_year_id: int
    tab_kind: str

    def __post_init__(self):
        if self.tab_kind not in TAB_KINDS:
            raise ValueError(f"Unknown archive tab: {self.tab_kind}")

    @classmethod
    def from_query(cls, school_year_id, tab_kind):
        """Builds a selection from query-string values; None when they do not form one."""
        try:
            return cls(int(school_year_id), tab_kind)
        except (TypeError, ValueError):
            return None


class ArchiveBrowser:

    def __init__(self, archives_data, selection: Optional[TabSelection] = None):
        self.groups = list(archives_data or [])
        self.selection = None
        if selection is not None and self._has_group(selection.school_year_id):
            self.selection = selection

    @property
    def is_empty(self):
        return not self.groups

    def _has_group(self, school_year_id):
        return any(g['school_year']['id'] == school_year_id for g in self.groups)

    def is_open(self, school_year_id, tab_kind):
        return self.selection == TabSelection(school_year_id, tab_kind)

    def selection_after_click(self, school_year_id, tab_kind):
        """What the selection becomes if this tab's button is clicked."""
        clicked = TabSelection(school_year_id, tab_kind)
        return None if self.selection == clicked else clicked

    def toggle(self, school_year_id, tab_kind):
        """Opens the tab, or closes it if it is the one already open."""
        self.selection = self.selection_after_click(school_year_id, tab_kind)
        return self.selection

    # ========================================================================
    # Row formatting
    # ========================================================================

    @staticmethod
    def student_rows(group):
        return [
            {'id': s['id'], 'first_name': s['first_name'], 'last_name': s['last_name']}
            for s in group.get('students') or []
        ]

    @staticmethod
    def payment_rows(group):
        rows = []
        for p in group.get('payments') or []:
            student = p.get('student')
            rows.append({
                'id': p['id'],
                'student': f"{student['first_name']} {student['last_name']}" if student else UNKNOWN_STUDENT,
                'amount': format_currency(p.get('amount_paid')),
                'date': format_date(p.get('payment_date')),
            })
        return rows

    @staticmethod
    def donation_rows(group):
        return [
            {
                'id': d['id'],
                'donated_by': d['donated_by'],
                'amount': format_currency(d.get('donation_amount')),
                'date': format_date(d.get('donation_date')),
            }
            for d in group.get('donations') or []
        ]

    def rows_for(self, group, tab_kind):
        if tab_kind == STUDENTS:
            return self.student_rows(group)
        if tab_kind == PAYMENTS:
            return self.payment_rows(group)
        if tab_kind == DONATIONS:
            return self.donation_rows(group)
        raise ValueError(f"Unknown archive tab: {tab_kind}")

    def panels(self):
        """Render model: one panel per group with its tab buttons and the open tab's rows."""
        panels = []
        for group in self.groups:
            school_year = group['school_year']
            year_id = school_year['id']
            tabs = []
            for kind, label in TABS:
                target = self.selection_after_click(year_id, kind)
                tabs.append({
                    'kind': kind,
                    'label': label,
                    'active': self.is_open(year_id, kind),
                    'target': target,
                })

            open_kind = self.selection.tab_kind if self.selection and self.selection.school_year_id == year_id else None
            panels.append({
                'school_year': school_year,
                'tabs': tabs,
                'open_tab': open_kind,
                'rows': self.rows_for(group, open_kind) if open_kind else [],
                'empty_message': EMPTY_TAB_MESSAGES.get(open_kind, ''),
            })
        return panels
