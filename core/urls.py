"""
URL configuration for the Contact Submissions backend.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

from submissions.views import HealthView

urlpatterns = [
    path('', RedirectView.as_view(url='/admin/', permanent=False)),
    path('admin/', admin.site.urls),
    path('api/health', HealthView.as_view(), name='health'),
    path('api/submissions', include('submissions.urls')),  # Public contact form + listing
]
