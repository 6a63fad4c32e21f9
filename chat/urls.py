from django.urls import path
from . import views

urlpatterns = [
    path('<uuid:contract_id>/chat/', views.send_message, name='chat_send'),
]
