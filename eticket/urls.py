from django.urls import path

from . import views

urlpatterns = [
    path("health/", views.health, name="health"),
    path("invoices/render.pdf", views.render_invoice, name="render_invoice"),
]
