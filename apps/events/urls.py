from django.urls import path
from . import views

app_name = 'events'

urlpatterns = [
    # GET  /api/events/                      - List events
    # POST /api/events/                      - Create event (operator)
    # POST /api/events/{id}/participate/     - Join a running event
    path('', views.events, name='list'),
    path('<uuid:event_id>/participate/', views.participate, name='participate'),
]
