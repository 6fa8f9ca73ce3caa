"""Stored records of the portal (users, announcements, contributions, payments, photos)."""