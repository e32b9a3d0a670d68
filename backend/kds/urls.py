from django.urls import path
from . import views

app_name = 'kds'

urlpatterns = [
    # Kitchen display board
    path('', views.kitchen_board, name='kitchen_board'),
]
