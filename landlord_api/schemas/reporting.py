"""
Response schemas for rent status, dashboard and analytics reports.
"""

from pydantic import BaseModel
from typing import List, Optional
from datetime import date


class RentStatusRow(BaseModel):
    property_id: int
    property_address: str
    monthly_rent: Optional[float] = None
    last_payment_date: Optional[date] = None
    last_payment_amount: Optional[float] = None
    total_collected_this_month: float = 0.0
    total_collected_this_year: float = 0.0
    days_since_last_payment: Optional[int] = None
    rent_status: str


class DashboardOverview(BaseModel):
    total_properties: int = 0
    total_appliances: int = 0
    broken_appliances: int = 0
    open_issues: int = 0
    critical_issues: int = 0
    total_maintenance_records: int = 0
    total_maintenance_cost: float = 0.0
    average_cost_per_maintenance: float = 0.0
    overdue_maintenance_count: int = 0
    upcoming_maintenance_count: int = 0
    items_needing_attention: int = 0


class RecentMaintenance(BaseModel):
    id: int
    appliance_name: str
    property_address: str
    maintenance_type: str
    cost: float = 0.0
    maintenance_date: date
    status: str


class ExpensiveAppliance(BaseModel):
    appliance_name: str
    property_address: str
    total_maintenance_cost: float = 0.0
    maintenance_count: int = 0


class PropertyNeedingAttention(BaseModel):
    property_address: str
    open_issues_count: int = 0
    critical_issues_count: int = 0
    overdue_maintenance_count: int = 0
    total_issues: int = 0


class MonthlySpending(BaseModel):
    month: str
    total_cost: float = 0.0
    maintenance_count: int = 0


class DashboardResponse(BaseModel):
    time_range: str
    overview: DashboardOverview
    recent_maintenance: List[RecentMaintenance]
    expensive_appliances: List[ExpensiveAppliance]
    properties_needing_attention: List[PropertyNeedingAttention]
    monthly_spending: List[MonthlySpending]


class MonthlyAnalyticsRow(BaseModel):
    property_id: int
    property_address: str
    month: int
    year: int
    rent_collected: float = 0.0
    maintenance_cost: float = 0.0
    net_income: float = 0.0
    payments_count: int = 0
    maintenance_count: int = 0
    expected_rent: float = 0.0


class PropertyAnalyticsRow(BaseModel):
    property_id: int
    property_address: str
    monthly_rent: Optional[float] = None
    total_rent_collected: float = 0.0
    total_late_fees: float = 0.0
    months_with_payments: int = 0
    expected_yearly_rent: float = 0.0
    last_payment_date: Optional[date] = None
    total_maintenance_cost: float = 0.0
    maintenance_count: int = 0
    recent_maintenance_cost: float = 0.0
    maintenance_to_rent_ratio: Optional[float] = None
    net_income: float = 0.0
    occupancy_rate: Optional[float] = None
    maintenance_category: str
    performance_rating: str
    payment_status: str
