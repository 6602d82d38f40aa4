"""
Scheduler core.

Components:
- models.py: data structures (Event, EventResult, ExecutionMode)
- registry.py: event key -> handler mapping
- queues.py: pending (submission order) and completed (completion order) FIFOs
- engine.py: runs handlers inline or as background tasks
- event_loop.py: EventLoop.tick(), at most one dispatch + one drain per call
- sinks.py: where finished results are rendered
"""
