"""ATTENDEASE timetable package.

Organized by feature modules (timetable, ...) with a thin Flask controller
layer over service/repository layers. The conflict checks in
``timetable.validator`` are pure and have no framework dependency.
"""
