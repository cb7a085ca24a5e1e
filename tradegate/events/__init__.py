from .journal import EmergencyPause, EventJournal, GateEvent, SignalProcessed

__all__ = ["EmergencyPause", "EventJournal", "GateEvent", "SignalProcessed"]
