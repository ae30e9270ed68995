"""
Section manager screen state.

Create and edit keep separate buffers: ``draft`` for the "Add New Section"
form and ``edit`` for the row being edited. Cancelling or switching the
edited row replaces ``edit`` only, so nothing leaks into the next create.
At most one row is in edit mode at a time.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional

from .feedback import ConfirmPrompt, Notifier
from .transport import OutcomeKind

logger = logging.getLogger(__name__)

CREATE_PROMPT = ConfirmPrompt(
    title='Are you sure?',
    text='Do you want to add this section?',
    icon='question',
    confirm_text='Yes, add it!',
)
DELETE_PROMPT = ConfirmPrompt(
    title='Are you sure?',
    text='This section will be permanently deleted.',
    icon='warning',
    confirm_text='Yes, delete it!',
)

CREATE_SUCCESS = 'Section added successfully!'
CREATE_FAILURE = 'Failed to add section.'
UPDATE_SUCCESS = 'Section updated successfully!'
UPDATE_FAILURE = 'Failed to update section.'
DELETE_SUCCESS = 'Section has been deleted.'

DELETE_FAILURE_MESSAGES = {
    OutcomeKind.CLIENT_ERROR: 'The section could not be deleted. It may have already been removed.',
    OutcomeKind.SERVER_ERROR: 'The server failed to delete the section. Please try again later.',
    OutcomeKind.NETWORK_FAILURE: 'Unable to reach the server. Check your connection and try again.',
}


@dataclass
class SectionDraft:
    """Buffer of the create form."""
    name: str = ''
    grade_level_id: Optional[int] = None

    def to_payload(self):
        return {
            'name': self.name,
            'grade_level_id': '' if self.grade_level_id is None else self.grade_level_id,
        }


@dataclass
class SectionEdit:
    """Buffer of the row being edited, pre-filled from that row."""
    section_id: int
    name: str
    grade_level_id: Optional[int]

    @classmethod
    def from_section(cls, section):
        return cls(section_id=section['id'], name=section['name'], grade_level_id=section['grade_level_id'])

    def to_payload(self):
        return {
            'name': self.name,
            'grade_level_id': '' if self.grade_level_id is None else self.grade_level_id,
        }


class SectionManager:
    DRAFT_FIELDS = ('name', 'grade_level_id')

    def __init__(self, sections, grade_levels, transport, confirm, notifier=None):
        self.sections = [dict(s) for s in sections or []]
        self.grade_levels = list(grade_levels or [])
        self.transport = transport
        self.confirm = confirm
        self.notifier = notifier or Notifier()

        self.draft = SectionDraft()
        self.edit = None
        self.processing = False
        self.reload_requested = False

    # ========================================================================
    # Render state
    # ========================================================================

    @property
    def editing_id(self):
        return self.edit.section_id if self.edit else None

    @property
    def submit_disabled(self):
        return self.processing

    @property
    def is_empty(self):
        return not self.sections

    def grade_level_choices(self):
        return [(g['id'], f"Grade {g['name']}") for g in self.grade_levels]

    def rows(self):
        rows = []
        for index, section in enumerate(self.sections):
            grade_level = section.get('grade_level') or {}
            rows.append({
                'section': section,
                'row_class': 'bg-white' if index % 2 == 0 else 'bg-gray-50',
                'is_editing': section['id'] == self.editing_id,
                'grade_label': f"Grade {grade_level.get('name') or 'N/A'}",
            })
        return rows

    def _find(self, section_id):
        for section in self.sections:
            if section['id'] == section_id:
                return section
        raise KeyError(section_id)

    # ========================================================================
    # Create
    # ========================================================================

    def set_draft_field(self, name, value):
        if name not in self.DRAFT_FIELDS:
            raise ValueError(f"Unknown section field: {name}")
        setattr(self.draft, name, value)

    def submit_create(self):
        """
        Confirms, then posts the draft once.
        Returns the TransportResult, or None if nothing was sent.
        """
        if self.processing:
            logger.debug("Create ignored: request already in flight")
            return None
        if not self.confirm(CREATE_PROMPT):
            return None

        self.processing = True
        try:
            result = self.transport.store_section(dataclasses.replace(self.draft))
        finally:
            self.processing = False

        if result.ok:
            self.draft = SectionDraft()
            self.notifier.toast(CREATE_SUCCESS, icon='success')
        else:
            self.notifier.alert('Error', CREATE_FAILURE, icon='error')
        return result

    # ========================================================================
    # Inline edit
    # ========================================================================

    def start_edit(self, section_id):
        """Puts a row into edit mode; any previous edit buffer is discarded."""
        self.edit = SectionEdit.from_section(self._find(section_id))
        return self.edit

    def set_edit_field(self, name, value):
        if self.edit is None:
            raise RuntimeError("No section is being edited")
        if name not in self.DRAFT_FIELDS:
            raise ValueError(f"Unknown section field: {name}")
        setattr(self.edit, name, value)

    def cancel_edit(self):
        """Leaves edit mode without sending anything."""
        self.edit = None

    def submit_update(self):
        """
        Sends the edit buffer as an update.
        On failure the row stays in edit mode with its values intact.
        """
        if self.edit is None or self.processing:
            return None

        self.processing = True
        try:
            result = self.transport.update_section(dataclasses.replace(self.edit))
        finally:
            self.processing = False

        if result.ok:
            updated = result.data.get('section')
            if updated:
                self._replace_row(updated)
            self.edit = None
            self.notifier.toast(UPDATE_SUCCESS, icon='success')
        else:
            self.notifier.alert('Error', UPDATE_FAILURE, icon='error')
        return result

    def _replace_row(self, updated):
        for index, section in enumerate(self.sections):
            if section['id'] == updated.get('id'):
                self.sections[index] = dict(updated)
                return

    # ========================================================================
    # Delete
    # ========================================================================

    def delete(self, section_id):
        """
        Confirms, then deletes. Only a successful response reports success
        and asks for a page reload; every failure kind gets its own message.
        """
        if self.processing:
            logger.debug("Delete ignored: request already in flight")
            return None
        if not self.confirm(DELETE_PROMPT):
            return None

        self.processing = True
        try:
            result = self.transport.delete_section(section_id)
        finally:
            self.processing = False

        if result.ok:
            self.notifier.alert('Deleted!', DELETE_SUCCESS, icon='success')
            self.reload_requested = True
        else:
            text = DELETE_FAILURE_MESSAGES[result.kind]
            if result.kind is OutcomeKind.CLIENT_ERROR and result.status_code in (401, 403):
                text = 'Your session has expired. Please log in again.'
            self.notifier.alert('Error', text, icon='error')
        return result
