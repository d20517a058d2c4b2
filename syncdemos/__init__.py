"""Runnable demonstrations of monitors, semaphores and prioritised interrupts."""

__version__ = "0.1.0"
__all__ = ["monitors", "semaphores", "interrupts"]