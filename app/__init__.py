"""Habit tracker API: session authentication and daily habit reminders."""
