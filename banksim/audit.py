"""
Audit Trail Module

Hash-chained in-memory audit log with SHA-256 for tamper detection.
Every state change made through the bank is logged here.
"""

import hashlib
import json
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
from decimal import Decimal


class AuditEventType(Enum):
    """Types of audit events"""
    # Client events
    CLIENT_CREATED = "client_created"
    PRIVILEGE_RAISED = "privilege_raised"

    # Account events
    ACCOUNT_OPENED = "account_opened"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    # Transaction events
    TRANSFER_POSTED = "transfer_posted"
    TRANSFER_DECLINED = "transfer_declined"
    TRANSACTION_CANCELLED = "transaction_cancelled"

    # Interest events
    INTEREST_ACCRUED = "interest_accrued"
    INTEREST_COMMITTED = "interest_committed"


def _convert_value(value):
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, dict):
        return {str(k): _convert_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [_convert_value(v) for v in value]
    return value


@dataclass
class AuditEvent:
    """
    Audit event with hash chaining for tamper detection
    """
    sequence: int
    tick: int
    event_type: AuditEventType
    entity_type: str  # client, account, transaction or bank
    entity_id: str
    previous_hash: str
    current_hash: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        # Metadata must be JSON serializable for hashing
        self.metadata = {k: _convert_value(v) for k, v in self.metadata.items()}

    def calculate_hash(self) -> str:
        """
        Calculate SHA-256 hash of this event
        Hash includes all fields except current_hash to prevent circular reference
        """
        hash_data = {
            'sequence': self.sequence,
            'tick': self.tick,
            'created_at': self.created_at.isoformat(),
            'event_type': self.event_type.value,
            'entity_type': self.entity_type,
            'entity_id': self.entity_id,
            'previous_hash': self.previous_hash,
            'metadata': self.metadata
        }

        json_data = json.dumps(hash_data, sort_keys=True, separators=(',', ':'))
        return hashlib.sha256(json_data.encode('utf-8')).hexdigest()

    def verify_hash(self) -> bool:
        """Verify that the current hash is correct"""
        return self.current_hash == self.calculate_hash()


class AuditTrail:
    """
    Hash-chained audit trail kept in memory
    """

    def __init__(self):
        self._events: List[AuditEvent] = []

    def log_event(
        self,
        event_type: AuditEventType,
        entity_type: str,
        entity_id: Any,
        tick: int,
        metadata: Optional[Dict[str, Any]] = None
    ) -> AuditEvent:
        """
        Log an audit event with hash chaining

        Args:
            event_type: Type of audit event
            entity_type: Type of entity being audited
            entity_id: ID of the entity
            tick: Simulated time of the event
            metadata: Additional event-specific data

        Returns:
            Created AuditEvent
        """
        event = AuditEvent(
            sequence=len(self._events) + 1,
            tick=tick,
            event_type=event_type,
            entity_type=entity_type,
            entity_id=str(entity_id),
            previous_hash=self.get_latest_hash() or "",
            current_hash="",
            metadata=metadata or {}
        )
        event.current_hash = event.calculate_hash()
        self._events.append(event)
        return event

    def get_events_for_entity(self, entity_type: str, entity_id: Any) -> List[AuditEvent]:
        """Get all audit events for a specific entity, oldest first"""
        entity_id = str(entity_id)
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    def get_events_by_type(self, event_type: AuditEventType) -> List[AuditEvent]:
        """Get audit events of one type, oldest first"""
        return [e for e in self._events if e.event_type == event_type]

    def get_all_events(self) -> List[AuditEvent]:
        return list(self._events)

    def verify_integrity(self) -> Dict[str, Any]:
        """
        Verify the integrity of the entire audit chain

        Returns:
            Dictionary with integrity check results
        """
        result = {
            'valid': True,
            'total_events': len(self._events),
            'hash_errors': [],
            'chain_breaks': []
        }

        previous_hash = ""
        for i, event in enumerate(self._events):
            if not event.verify_hash():
                result['valid'] = False
                result['hash_errors'].append({
                    'sequence': event.sequence,
                    'position': i,
                    'expected_hash': event.calculate_hash(),
                    'actual_hash': event.current_hash
                })
            if event.previous_hash != previous_hash:
                result['valid'] = False
                result['chain_breaks'].append({
                    'sequence': event.sequence,
                    'position': i,
                    'expected_previous_hash': previous_hash,
                    'actual_previous_hash': event.previous_hash
                })
            previous_hash = event.current_hash

        return result

    def count_events(self) -> int:
        """Get total number of audit events"""
        return len(self._events)

    def get_latest_hash(self) -> Optional[str]:
        """Get the hash of the most recent audit event"""
        return self._events[-1].current_hash if self._events else None
