from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    name: str
    bg: str              # fenêtre
    surface: str         # cartes, panneaux
    surface_muted: str   # panneaux secondaires
    text: str
    text_muted: str
    primary: str         # boutons principaux
    success: str         # "running"
    warning: str         # "paused"
    danger: str          # erreurs
    stroke: str          # bordures
    preview_bg: str      # fond de l'aperçu quand bgMode == transparent


LIGHT = Theme(
    name="light",
    bg="#faf9f6",
    surface="#ffffff",
    surface_muted="#f1efe9",
    text="#1c1917",
    text_muted="#57534e",
    primary="#2563eb",
    success="#16a34a",
    warning="#f59e0b",
    danger="#dc2626",
    stroke="#d6d3d1",
    preview_bg="#2b2b2b",
)


DARK = Theme(
    name="dark",
    bg="#0a0a0a",
    surface="#171717",
    surface_muted="#111111",
    text="#e5e5e5",
    text_muted="#a3a3a3",
    primary="#22c55e",
    success="#22c55e",
    warning="#f59e0b",
    danger="#ef4444",
    stroke="#262626",
    preview_bg="#000000",
)


THEMES = {
    "light": LIGHT,
    "dark": DARK,
}
