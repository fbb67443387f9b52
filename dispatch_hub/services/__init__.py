"""
Services layer - dispatch business logic lives here.
Keep services focused on one concern each.

DESIGN PRINCIPLE:
- Services contain business logic, NOT console I/O
- district_queue.py: queue discipline per district
- trend_analyzer.py: today vs. yesterday category comparison
- audit_log.py: append-only mutation history
- state_store.py: durable snapshot/restore
- dispatch_service.py: orchestration of the above
"""
