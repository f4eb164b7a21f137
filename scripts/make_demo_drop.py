from __future__ import annotations

from pathlib import Path

# Smallest valid PNG: 1x1 transparent pixel
_PNG_1PX = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d00000000"
    "49454e44ae426082"
)


def main():
    root = Path("demo_drop/rpg_assets")
    (root / "tiles").mkdir(parents=True, exist_ok=True)
    (root / "characters" / "hero").mkdir(parents=True, exist_ok=True)

    (root / "tiles" / "grass.png").write_bytes(_PNG_1PX)
    (root / "tiles" / "water.png").write_bytes(_PNG_1PX)
    (root / "characters" / "hero" / "idle.png").write_bytes(_PNG_1PX)
    (root / "characters" / "hero" / "idle.aseprite").write_bytes(b"dummy_source")
    (root / "notes.txt").write_text("work notes, not shipped\n", encoding="utf-8")

    print(f"Created demo drop at: {root.resolve()}")
    print(f"Try: assetpacker -s {root} -o demo_out -n rpg_asset_pack -v 1.0 --dry-run")

if __name__ == "__main__":
    main()
