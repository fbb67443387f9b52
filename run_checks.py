import tempfile
from pathlib import Path

from dispatch_hub.main import build_service

with tempfile.TemporaryDirectory() as tmp:
    service = build_service(str(Path(tmp) / "dispatch_data.json"))

    print('SUBMIT:')
    for category, district, priority in [("fire", "central", 1), ("medical", "central", 0), ("flood", "central", 1)]:
        print(service.submit(category, district, priority).describe())

    print('\nQUEUES:')
    for district, incidents in service.snapshot():
        print(district, [incident.category for incident in incidents])

    print('\nDISPATCH central:')
    print(service.dispatch_next('central').describe())

    print('\nTRENDS:')
    print(service.trends().model_dump())

    print('\nPERSIST / RESTORE:')
    print(service.persist().message)
    print(service.restore().message)

    print('\nLOG:')
    for entry in service.log_entries():
        print(entry.describe())
