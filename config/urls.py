from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    # Redirect root to /api/health/
    path("", RedirectView.as_view(url="/api/health/", permanent=False)),
    path("api/", include("eticket.urls")),
]
