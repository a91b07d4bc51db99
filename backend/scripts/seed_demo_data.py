# backend/scripts/seed_demo_data.py
"""
Seed a small demo dataset through the service layer: churches with images,
positions, subjects and workers (with children, schooling and subject links).

Usage (from repo root):
  python backend/scripts/seed_demo_data.py --workers 25 --seed 42
  python backend/scripts/seed_demo_data.py --dry-run

No extra deps: names are drawn from built-in lists.
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from datetime import date, timedelta
from pathlib import Path

HERE = Path(__file__).resolve()
BACKEND_ROOT = HERE.parents[1]  # .../backend

if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

import church_admin.models  # noqa: E402,F401
from church_admin.db import SessionLocal  # noqa: E402
from church_admin.models.user import UserRole  # noqa: E402
from church_admin.schemas.church import ChurchCreate  # noqa: E402
from church_admin.schemas.position import PositionCreate  # noqa: E402
from church_admin.schemas.subject import SubjectCreate  # noqa: E402
from church_admin.schemas.user import WorkerCreate  # noqa: E402
from church_admin.services import churches, positions, subjects, users  # noqa: E402

logger = logging.getLogger("seed_demo_data")

FIRST_NAMES = ["Maria", "Jose", "Ana", "Juan", "Rosa", "Pedro", "Liza", "Mark", "Grace", "Paolo"]
LAST_NAMES = ["Santos", "Reyes", "Cruz", "Bautista", "Garcia", "Mendoza", "Torres", "Flores"]
TOWNS = ["Malolos", "Tarlac City", "San Fernando", "Lucena", "Batangas City"]
POSITIONS = [
    ("Pastor", "Leads the congregation"),
    ("Deacon", "Assists in services and outreach"),
    ("Youth Leader", "Runs youth ministry"),
    ("Treasurer", "Handles church finances"),
]
SUBJECTS = [
    ("Bible Study", "Weekly scripture study"),
    ("Music Ministry", "Choir and worship band"),
    ("Sunday School", "Children's teaching"),
    ("Outreach", "Community missions"),
]
SCHOOLS = ["Bulacan State University", "University of the Philippines", "Tarlac State University"]


def _birthday(rng: random.Random, min_age: int, max_age: int) -> date:
    return date.today() - timedelta(days=rng.randint(min_age * 365, max_age * 365))


def seed(worker_count: int, rng: random.Random, dry_run: bool) -> None:
    with SessionLocal() as db:
        church_ids = []
        for i, town in enumerate(TOWNS):
            payload = ChurchCreate(
                address=f"{i + 1} Rizal St., {town}",
                latitude=rng.randint(13, 16),
                longitude=rng.randint(120, 122),
                images=[f"https://img.example.org/church-{i + 1}.jpg"],
            )
            if dry_run:
                logger.info("[dry-run] church %s", payload.address)
                continue
            church_ids.append(churches.create_church(db, payload).id)

        position_ids = []
        for name, desc in POSITIONS:
            if dry_run:
                logger.info("[dry-run] position %s", name)
                continue
            position_ids.append(positions.create_position(db, PositionCreate(name=name, description=desc)).id)

        subject_ids = []
        for name, desc in SUBJECTS:
            if dry_run:
                logger.info("[dry-run] subject %s", name)
                continue
            subject_ids.append(subjects.create_subject(db, SubjectCreate(name=name, description=desc)).id)

        for n in range(worker_count):
            first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
            kids = [
                {
                    "firstname": rng.choice(FIRST_NAMES),
                    "lastname": last,
                    "birthday": _birthday(rng, 1, 17).isoformat(),
                    "gender": rng.choice(["male", "female"]),
                }
                for _ in range(rng.randint(0, 3))
            ]
            payload = WorkerCreate.model_validate({
                "email": f"{first}.{last}.{n}@church.local".lower(),
                "password": "worker-pass-123",
                "confirmPassword": "worker-pass-123",
                "firstname": first,
                "lastname": last,
                "birthday": _birthday(rng, 20, 65).isoformat(),
                "gender": rng.choice(["male", "female"]),
                "status": rng.choice(["single", "married", "widowed"]),
                "churchId": rng.choice(church_ids) if church_ids else None,
                "positionId": rng.choice(position_ids) if position_ids else None,
                "children": kids,
                "educationalAttainment": [
                    {"schoolname": rng.choice(SCHOOLS), "education": "College"},
                ],
                "subjects": rng.sample(subject_ids, k=min(2, len(subject_ids))),
            })
            if dry_run:
                logger.info("[dry-run] worker %s (%d children)", payload.email, len(kids))
                continue
            users.create_user(db, payload, role=UserRole.worker)

    logger.info("seeded %d churches, %d positions, %d subjects, %d workers%s",
                len(TOWNS), len(POSITIONS), len(SUBJECTS), worker_count,
                " (dry run)" if dry_run else "")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Seed Church Worker Admin demo data.")
    ap.add_argument("--workers", type=int, default=25)
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--dry-run", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    seed(args.workers, random.Random(args.seed), args.dry_run)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
