from django.urls import path
from . import views

app_name = 'achievements'

urlpatterns = [
    # GET  /api/achievements/               - List achievements
    # POST /api/achievements/               - Create achievement (operator)
    # GET  /api/achievements/mine/          - My achievements
    # POST /api/achievements/{id}/award/    - Award to a user (operator)
    path('', views.achievements, name='list'),
    path('mine/', views.my_achievements, name='mine'),
    path('<uuid:achievement_id>/award/', views.award, name='award'),
]
