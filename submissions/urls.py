"""
Submission URL Configuration
"""
from django.urls import re_path
from .views import SubmissionListCreateView, SubmissionDetailView

app_name = 'submissions'

urlpatterns = [
    re_path(r'^/?$', SubmissionListCreateView.as_view(), name='list'),
    re_path(r'^/(?P<id>[^/]+)/?$', SubmissionDetailView.as_view(), name='detail'),
]
