# school_admin/forms.py

from django import forms
from django.core.exceptions import NON_FIELD_ERRORS
from django.utils.translation import gettext_lazy as _

from .models import GradeLevel, Section
from .sanitizer import sanitize_text

INPUT_CLASSES = 'w-full border border-gray-300 rounded-lg px-3 py-2 focus:outline-none focus:ring-2 focus:ring-blue-400'

DUPLICATE_SECTION_ERROR = _('This section already exists in this grade level')


# --- Admin Login Form ---
class AdminLoginForm(forms.Form):
    """Credentials posted by the admin login screen."""
    username = forms.CharField(
        max_length=150,
        error_messages={'required': _('The username field is required.')},
        widget=forms.TextInput(attrs={
            'class': 'w-full pl-10 pr-4 py-3 border rounded-xl focus:outline-none focus:ring-2 transition',
            'placeholder': 'Enter your username',
            'autocomplete': 'username',
        })
    )
    password = forms.CharField(
        strip=False,
        error_messages={'required': _('The password field is required.')},
        widget=forms.PasswordInput(attrs={
            'class': 'w-full pl-10 pr-16 py-3 border rounded-xl focus:outline-none focus:ring-2 transition',
            'placeholder': 'Enter your password',
            'autocomplete': 'current-password',
        })
    )


# --- Section Forms ---
class SectionForm(forms.Form):
    """
    Create form for a Section.

    grade_level_id must reference an existing GradeLevel, and the
    (name, grade level) pair must be unique.
    """
    name = forms.CharField(
        max_length=50,
        error_messages={'required': _('The name field is required.')},
        widget=forms.TextInput(attrs={'class': INPUT_CLASSES, 'placeholder': 'Section Name'})
    )
    grade_level_id = forms.ModelChoiceField(
        queryset=GradeLevel.objects.all(),
        error_messages={
            'required': _('The grade level field is required.'),
            'invalid_choice': _('The selected grade level is invalid.'),
        },
    )

    def __init__(self, *args, instance=None, **kwargs):
        self.instance = instance
        super().__init__(*args, **kwargs)

    def clean_name(self):
        name = sanitize_text(self.cleaned_data['name'], 'name')
        if not name:
            raise forms.ValidationError(_('The name field is required.'))
        return name

    def target_grade_level(self):
        return self.cleaned_data.get('grade_level_id')

    def clean(self):
        cleaned_data = super().clean()
        name = cleaned_data.get('name')
        grade_level = self.target_grade_level()

        if name and grade_level:
            duplicates = Section.objects.filter(name=name, grade_level=grade_level)
            if self.instance is not None:
                duplicates = duplicates.exclude(id=self.instance.id)
            if duplicates.exists():
                raise forms.ValidationError(DUPLICATE_SECTION_ERROR, code='duplicate')

        return cleaned_data

    def save(self):
        section = self.instance or Section()
        section.name = self.cleaned_data['name']
        section.grade_level = self.target_grade_level()
        section.save()
        return section


class SectionUpdateForm(SectionForm):
    """Update form: a missing grade level keeps the section's current one."""

    def __init__(self, *args, instance, **kwargs):
        super().__init__(*args, instance=instance, **kwargs)
        self.fields['grade_level_id'].required = False

    def target_grade_level(self):
        return self.cleaned_data.get('grade_level_id') or self.instance.grade_level


def flatten_errors(form):
    """
    Field-keyed error map with one message per field, the shape the
    screens render under their inputs. Non-field errors are keyed 'error'.
    """
    errors = {}
    for field, messages_list in form.errors.items():
        key = 'error' if field == NON_FIELD_ERRORS else field
        errors[key] = str(messages_list[0])
    return errors
