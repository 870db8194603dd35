from django.urls import path
from . import views

app_name = 'xp'

urlpatterns = [
    # POST /api/xp/grant/           - Grant XP (teacher/operator)
    # GET  /api/xp/student/         - XP and level (own, or ?student_id= for teachers)
    # GET  /api/xp/budget/today/    - Teacher's budget for today
    # POST /api/xp/budget/          - Override a budget (operator)
    # GET  /api/xp/leaderboard/     - Top students by XP
    path('grant/', views.grant, name='grant'),
    path('student/', views.student_xp, name='student'),
    path('budget/today/', views.budget_today, name='budget-today'),
    path('budget/', views.set_budget, name='budget-set'),
    path('leaderboard/', views.leaderboard, name='leaderboard'),
]
