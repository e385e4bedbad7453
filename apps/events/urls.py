from django.urls import path

from . import views

app_name = 'events'
urlpatterns = [
    path('', views.EventList.as_view(), name='event_list'),
    path('<int:pk>/participants/', views.EventParticipants.as_view(), name='event_participants'),
    path('<int:pk>/waitlist/', views.EventWaitlist.as_view(), name='event_waitlist'),
]
