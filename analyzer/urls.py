# analyzer/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path("", views.index, name="index"),
    path("history/", views.history, name="history"),
    path("results/<uuid:contract_id>/", views.results, name="results"),

    path("api/contracts/", views.contracts, name="contracts"),
    path("api/contracts/<uuid:contract_id>/", views.contract_detail, name="contract_detail"),
    path("api/contracts/<uuid:contract_id>/report.pdf", views.contract_report, name="contract_report"),
]
