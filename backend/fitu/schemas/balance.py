from pydantic import BaseModel
from typing import List, Literal

BalanceStatus = Literal["UNDER_GOAL", "OVER_GOAL", "NO_GOAL_SET"]


class DailyBalance(BaseModel):
    date: str
    food_calories: int
    exercise_calories: int
    net_calories: int
    daily_goal: int
    calorie_balance: int  # positive = under goal, negative = over goal
    is_under_goal: bool
    is_over_goal: bool
    goal_percentage: int
    status: BalanceStatus
    remaining_calories: int
    excess_calories: int


class WeeklyTotals(BaseModel):
    total_food: int = 0
    total_exercise: int = 0
    total_net: int = 0
    days_under_goal: int = 0
    days_over_goal: int = 0


class WeeklyBalance(BaseModel):
    week_start: str
    daily_balances: List[DailyBalance]
    weekly_totals: WeeklyTotals
    weekly_average_net: int
    success_rate: int


class QuickStats(BaseModel):
    calories_remaining: int
    calories_over: int
    can_eat_more: bool
    goal_completion: str
    net_calories_today: int


class BalanceSummary(BaseModel):
    today: DailyBalance
    quick_stats: QuickStats
