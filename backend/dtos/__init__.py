"""
Data Transfer Objects (DTOs) Layer

Types that carry data across the HTTP/service boundary without exposing
database models.

Structure:
- internal/: Outcomes returned by service flows (views, redirects, delete checks)
"""
