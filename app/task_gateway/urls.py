from django.urls import path
from task_gateway.views import TaskView

urlpatterns = [
    path("tasks/<str:key>/", TaskView.as_view(), name="task"),
]
