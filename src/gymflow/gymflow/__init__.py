"""GymFlow package.

Organized by feature modules (workouts, attendance, users, transfer) with a
thin Flask controller layer over service/repository layers.
"""
