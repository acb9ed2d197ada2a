from src.client.dashboard import DashboardClient, ReportView, ScheduleDayView
from src.client.gate import ContextGate, Ticket

__all__ = ["ContextGate", "DashboardClient", "ReportView", "ScheduleDayView", "Ticket"]
