"""
Food and restaurant vocabulary merged into the spelling dictionary.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

DOMAIN_WORDS = (
    "achari", "adai", "aloo", "andhra", "bajji", "balchao", "batata", "benne", "bhara", "bhel", "bhuna",
    "bhutta", "bonjour", "boti", "bournvita", "chaat", "chai", "chana", "chettinad", "chilli", "chingri", "corn",
    "dahi", "dal", "dhokla", "dosa", "dosas", "fanta", "galouti", "gassi", "goan", "gobi", "gosht", "hara",
    "hariyali", "hola", "horlicks", "hyderabadi", "idli", "idlies", "indian", "jain", "jhinga", "kakori",
    "kanchipuram", "kerala", "khaman", "kodi", "kolhapuri", "koliwada", "konju", "kosha", "kura", "kuzhambu",
    "laal", "maas", "malabar", "malai", "mallige", "manchurian", "mangsho", "masala", "medu", "mirchi",
    "moilee", "moong", "mudda", "mysore", "namaskar", "namaste", "neer", "nonvegiterian", "pakora", "paneer",
    "pani", "papad", "papdi", "patia", "pav", "pesarattu", "podi", "poha", "pollichathu", "puri", "pyaza",
    "ragi", "rava", "roasted", "rogan", "royallu", "saag", "sabudana", "sada", "samabar", "sambar", "sanna",
    "schezwan", "seekh", "sev", "shami", "sukka", "tata", "thatte", "tikka", "tikki", "uttappam", "vada",
    "varutharaccha", "vegiterian", "vepudu", "vindaloo", "zup",
)


def load_domain_words(file_path: Optional[Union[str, Path]] = None) -> List[str]:
    """
    Built-in domain vocabulary, extended by an optional word-per-line file

    Blank lines and lines starting with ``#`` in the file are ignored.
    """
    words = list(DOMAIN_WORDS)
    if file_path is None:
        return words

    with open(file_path, 'r', encoding='utf-8') as f:
        extra = [
            line.strip() for line in f
            if line.strip() and not line.lstrip().startswith("#")
        ]
    logger.debug(f"Loaded {len(extra)} extra domain words from {file_path}")
    return words + extra
