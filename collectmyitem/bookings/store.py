"""
Stockage des réservations dans un unique document JSON (tableau d'objets Booking).
- Chaque mutation relit tout le fichier, modifie la liste puis la réécrit entièrement.
- Les cycles lecture/modification/écriture d'un même fichier sont sérialisés par un verrou
  (un écrivain à la fois dans le processus) et le fichier est remplacé atomiquement.
- Plusieurs processus partageant le même fichier ne sont PAS synchronisés entre eux:
  deux écritures concurrentes peuvent encore perdre une mise à jour (dernier écrivain gagnant).
"""
import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from collectmyitem import config

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_PAID = "paid"

# Champs gérés par le store, jamais écrasés par un upsert
PROTECTED_FIELDS = ("bookingRef", "status", "createdAt", "paidAt")

_locks: Dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


class BookingStoreError(RuntimeError):
    """Fichier de réservations illisible ou corrompu."""


class BookingAlreadyPaidError(ValueError):
    """Réservation déjà payée: ses champs ne peuvent plus être modifiés."""


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


# module collectmyitem.bookings.store
class BookingStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def _load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise BookingStoreError(f"Lecture impossible de {self.path}: {e}") from e
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise BookingStoreError(f"JSON invalide dans {self.path}: {e}") from e
        if not isinstance(data, list):
            raise BookingStoreError(f"{self.path} doit contenir un tableau de réservations")
        return data

    def _save(self, bookings: List[Dict[str, Any]]) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".bookings-", suffix=".tmp", dir=str(directory))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(bookings, fh, indent=2, ensure_ascii=False)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    @staticmethod
    def _find(bookings: List[Dict[str, Any]], booking_ref: str) -> Optional[Dict[str, Any]]:
        return next((b for b in bookings if isinstance(b, dict) and b.get("bookingRef") == booking_ref), None)

    def upsert(self, booking_ref: str, fields: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Crée ou complète la réservation `booking_ref`.
        - Absente: créée en statut pending avec createdAt=maintenant, puis fusion des champs.
        - Présente: fusion superficielle des champs (les champs protégés ne changent pas).
        - Déjà payée: BookingAlreadyPaidError, fichier inchangé.
        Retour: copie de l'enregistrement après écriture.
        """
        if not booking_ref:
            raise ValueError("booking_ref is required")
        updates = {k: v for k, v in (fields or {}).items() if k not in PROTECTED_FIELDS}
        with self._lock:
            bookings = self._load()
            booking = self._find(bookings, booking_ref)
            if booking is None:
                booking = {"bookingRef": booking_ref, **updates, "status": STATUS_PENDING, "createdAt": utc_now_iso()}
                bookings.append(booking)
                logger.info("bookings.created ref=%s", booking_ref)
            elif booking.get("status") == STATUS_PAID:
                raise BookingAlreadyPaidError(f"booking {booking_ref} is already paid")
            else:
                booking.update(updates)
                logger.info("bookings.updated ref=%s fields=%s", booking_ref, sorted(updates))
            self._save(bookings)
            return dict(booking)

    def mark_paid(self, booking_ref: str, **extra: Any) -> Optional[Dict[str, Any]]:
        """
        Passe la réservation en statut paid (paidAt=maintenant).
        - Référence inconnue: no-op silencieux, fichier inchangé, retourne None.
        - Déjà payée: idempotent, rien n'est réécrit.
        """
        with self._lock:
            bookings = self._load()
            booking = self._find(bookings, booking_ref) if booking_ref else None
            if booking is None:
                logger.info("bookings.mark_paid unknown ref=%s", booking_ref)
                return None
            if booking.get("status") == STATUS_PAID:
                return dict(booking)
            booking.update({k: v for k, v in extra.items() if k not in PROTECTED_FIELDS})
            booking["status"] = STATUS_PAID
            booking["paidAt"] = utc_now_iso()
            self._save(bookings)
            logger.info("bookings.paid ref=%s", booking_ref)
            return dict(booking)

    def get(self, booking_ref: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            booking = self._find(self._load(), booking_ref)
        return dict(booking) if booking else None

    def list_all(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(b) for b in self._load()]


def get_store() -> BookingStore:
    """Store par défaut (config.BOOKINGS_FILE); dépendance FastAPI surchargeable en tests."""
    return BookingStore(config.BOOKINGS_FILE)
