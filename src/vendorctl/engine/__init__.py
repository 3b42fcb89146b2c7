"""Engine layer — store, derived view, history, and notification.

Engine modules may import from the domain layer only.
All operations are synchronous and run to completion before returning.
"""
