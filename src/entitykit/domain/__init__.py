"""Domain layer — user, item and product records, DTOs and repositories.

Records are immutable entity snapshots.  Each record type has an explicit
``to_*_dto`` mapping to the shape shared with clients; DTOs never inherit from
records or the other way round.
"""
