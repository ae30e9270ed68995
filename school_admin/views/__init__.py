"""
Views package initializer.

This __init__.py file imports all view functions from their respective
modules so that urls.py can refer to them as ``views.<name>``.
"""

from .views_utils import *
from .views_auth import *
from .views_pages import *
from .views_ajax import *
