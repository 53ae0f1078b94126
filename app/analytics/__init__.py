"""
Spending analytics: period statistics, budget overlay, trends and calendar.
"""
