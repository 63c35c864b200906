"""Domain models for the application"""
from .notification import Notification

__all__ = ['Notification']
