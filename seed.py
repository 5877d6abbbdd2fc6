"""
Sample catalog data

Run `python seed.py` to insert the sample projects into the configured
database. An existing catalog is left alone unless `--force` is given.
"""

import logging
import sys
from typing import List

from database import count_documents, create_document
from schemas import Dimensions, ProjectRecord

logger = logging.getLogger(__name__)

SAMPLE_PROJECTS = [
    ProjectRecord(
        title_en="Modern Oak Dining Table",
        title_am="ዘመናዊ ኦክ የመግቢያ ጠረጴዛ",
        description_en="Handcrafted solid oak dining table with CNC precision joints",
        description_am="በእጅ የተሠራ ጠንካራ ኦክ የመግቢያ ጠረጴዛ በCNC ትክክለኛ መገጣጠሚያዎች",
        category="living",
        materials=["Solid Oak", "Steel Legs", "Polyurethane Finish"],
        dimensions=Dimensions(length="180", width="90", height="75", unit="cm"),
        images=["/projects/dining-table-1.jpg", "/projects/dining-table-2.jpg"],
        featured=True,
    ),
    ProjectRecord(
        title_en="Minimalist Bed Frame",
        title_am="ሚኒማሊስት የአልጋ ሠንጠረዥ",
        description_en="CNC-cut minimalist bed frame with integrated lighting",
        description_am="በCNC የተቆረጠ ሚኒማሊስት የአልጋ ሠንጠረዥ ከተዋሃደ መብራት",
        category="bedroom",
        materials=["Birch Plywood", "LED Strips", "Matte Finish"],
        dimensions=Dimensions(length="200", width="180", height="40", unit="cm"),
        images=["/projects/bed-frame-1.jpg"],
        featured=True,
    ),
]


def seed_projects(force: bool = False) -> List[str]:
    """Insert SAMPLE_PROJECTS in order. Returns the new ids."""
    existing = count_documents("project")
    if existing and not force:
        logger.info("Catalog already has %d projects; nothing seeded", existing)
        return []
    ids = [create_document("project", project) for project in SAMPLE_PROJECTS]
    logger.info("Seeded %d projects", len(ids))
    return ids


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_projects(force="--force" in sys.argv[1:])
