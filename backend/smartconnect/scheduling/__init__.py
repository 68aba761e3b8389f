"""
Scheduling engine

Pure functions behind availability and booking:
- windows.py: HH:MM parsing and half-open time windows
- rules.py: availability rule variants, settings, save-time validation
- slots.py: slot generation for a date
- conflicts.py: removing windows taken by active bookings
- status.py: booking status state machine
"""
