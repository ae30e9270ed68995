# school_admin/urls.py

from django.urls import path
from . import views

urlpatterns = [
    # Login & Logout
    path('login', views.admin_login_view, name='admin_login'),
    path('logout', views.logout_view, name='admin_logout'),

    # Pages
    path('dashboard', views.dashboard_view, name='admin_dashboard'),
    path('archives', views.archives_view, name='archives'),
    path('sections', views.sections_view, name='sections'),

    # ==== Section endpoints ====
    path('section/list', views.list_sections_ajax, name='section_list'),
    path('section/store', views.store_section, name='section_store'),
    path('section/update/<int:section_id>', views.update_section, name='section_update'),
    path('section/delete/<int:section_id>', views.delete_section, name='section_delete'),
]
