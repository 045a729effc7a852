import json
from pathlib import Path

import pytest

SAMPLE_CSV = """Product Name,Printing,Condition,Rarity,Number,Market Price
"Aria, Warden of the Vale",Normal,Near Mint,Legend,26-001L,$4.00
"Aria, Warden of the Vale",Normal,Lightly Played,Legend,26-001L,$3.00
"Aria, Warden of the Vale",Foil,Near Mint,Legend,26-001L,$10.00
"Aria, Warden of the Vale (Full Art)",Foil,Near Mint,Legend,26-001L,$25.00
Ember Scout,Normal,Near Mint,Common,26-045C,$0.25
Ember Scout (Full Art Signature),Foil,Near Mint,Common,26-045C,$60.00
Old Guard,Normal,Near Mint,Common,26-093C/15-095C,$0.50
Ancient Titan (Full Art),Foil,Near Mint,Hero,14-010H,$40.00
Storm Herald (Full Art Reprint),Foil,Near Mint,Hero,26-120H,$15.00
Festival Sprite,Foil,Near Mint,Promo,PR-001/26-045C,$5.00
Broken Row,Normal,Near Mint
Mystery Card,Normal,Near Mint,Common,garbage,$1.00
"""

SAMPLE_METADATA = {
    "setNumber": 26,
    "title": "Twenty-Six",
    "alternateTitle": "XXVI",
    "releaseYear": 2024,
}


@pytest.fixture
def sample_csv() -> str:
    """Price listing covering every number shape and classification."""
    return SAMPLE_CSV


@pytest.fixture
def sets_dir(tmp_path: Path) -> Path:
    """A sets directory holding one set, "xxvi", with CSV and metadata."""
    root = tmp_path / "set"
    set_dir = root / "xxvi"
    set_dir.mkdir(parents=True)
    (set_dir / "cards.csv").write_text(SAMPLE_CSV, encoding="utf-8")
    (set_dir / "set.json").write_text(json.dumps(SAMPLE_METADATA), encoding="utf-8")
    return root
