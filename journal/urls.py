# journal/urls.py
from django.urls import path
from .views import (
    analyze_dream, dream_detail, dream_list, export_dreams, get_analysis, get_stats,
)

urlpatterns = [
    path('dreams/', dream_list, name='dream_list'),
    path('dreams/<uuid:id>/', dream_detail, name='dream_detail'),
    path('analyses/<uuid:id>/', get_analysis, name='get_analysis'),
    path('analyze/', analyze_dream, name='analyze_dream'),
    path('stats/', get_stats, name='get_stats'),
    path('export/', export_dreams, name='export_dreams'),
]
