"""
Dashboard bounded context: domain layer.

This module contains all domain logic for the dashboard context:
- Bot activation countdown (activate / pause / resume)
- Client capital and bot earnings
- Subscription plans
- System feature flags
"""
