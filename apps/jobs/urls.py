from django.urls import path
from . import views

app_name = 'jobs'

urlpatterns = [
    # GET  /api/jobs/                 - List jobs (own for teachers, open for students)
    # POST /api/jobs/                 - Create job (teacher)
    # POST /api/jobs/{id}/apply/      - Apply (student)
    # POST /api/jobs/{id}/review/     - Approve/reject/return an application
    # POST /api/jobs/{id}/close/      - Close and pay out
    # GET  /api/jobs/stats/           - Teacher's job statistics
    path('', views.jobs, name='list'),
    path('stats/', views.stats, name='stats'),
    path('<uuid:job_id>/apply/', views.apply, name='apply'),
    path('<uuid:job_id>/review/', views.review, name='review'),
    path('<uuid:job_id>/close/', views.close, name='close'),
]
