"""
Business services for the booking sync webhook.

- data_api.py: PostgREST request descriptors, filters and HTTP calls
- bookings.py: create, search, reschedule and cancel operations
- dispatcher.py: trigger-event routing and response shaping
"""

__all__: list[str] = []
