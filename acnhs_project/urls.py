# acnhs_project/urls.py

from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path('', RedirectView.as_view(pattern_name='admin_login', permanent=False)),
    path('admin/', include('school_admin.urls')),
]
