"""Handlers for users, announcements and contributions that return JSON-ready HTTP responses."""