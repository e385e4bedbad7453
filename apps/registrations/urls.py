from django.urls import path

from . import views

app_name = 'registrations'
urlpatterns = [
    path('register/', views.SubmitRegistration.as_view(), name='submit'),
]
