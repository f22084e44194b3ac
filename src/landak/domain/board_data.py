"""Static board content: the default 104-cell board."""

from __future__ import annotations

from dataclasses import dataclass

from landak.domain.enums import TileSubtype, TileType


@dataclass(frozen=True, slots=True)
class TileDefinition:
    """Catalog entry used to build a fresh tile."""

    type: TileType
    name: str
    price: int = 0
    color_group: str | None = None
    subtype: TileSubtype = TileSubtype.PLAIN
    base_rent: int | None = None


def _prop(name: str, group: str, price: int) -> TileDefinition:
    return TileDefinition(TileType.PROPERTY, name, price, group)


def _rail(name: str) -> TileDefinition:
    return TileDefinition(TileType.PROPERTY, name, 200, "rail", TileSubtype.RAIL)


def _bus(name: str) -> TileDefinition:
    return TileDefinition(TileType.PROPERTY, name, 200, "rail", TileSubtype.BUS)


def _ferry(name: str) -> TileDefinition:
    return TileDefinition(TileType.PROPERTY, name, 180, "ferry", TileSubtype.FERRY)


def _air(name: str) -> TileDefinition:
    return TileDefinition(TileType.PROPERTY, name, 260, "air", TileSubtype.AIR)


def _util(name: str) -> TileDefinition:
    return TileDefinition(TileType.PROPERTY, name, 150, "util", TileSubtype.UTILITY)


def _casino(name: str) -> TileDefinition:
    return TileDefinition(TileType.PROPERTY, name, 300, "casino", TileSubtype.CASINO)


def _cell(tile_type: TileType, name: str) -> TileDefinition:
    return TileDefinition(tile_type, name)


_TAX = _cell(TileType.TAX, "Impuesto 33%")
_EVENT = _cell(TileType.EVENT, "Suerte")
_GO_TO_JAIL = _cell(TileType.GO_TO_JAIL, "Ir a la carcel")


BOARD_DEFINITION: tuple[TileDefinition, ...] = (
    _cell(TileType.START, "Salida"),
    _prop("San Lorenzo ermitie", "Txakoli", 60),
    _prop("Santa Maria Elizie", "Txakoli", 70),
    _rail("Metro Zelaieta Sur"),
    _TAX,
    _prop("Pipi's Bar", "Pintxo", 80),
    _prop("Artea", "Pintxo", 90),
    _bus("Bizkaibus Herriko Enparantza"),
    _util("Iberduero Aguas"),
    _prop("Perrukeria", "Kalea", 100),
    _prop("Estetika Zentroa", "Kalea", 105),
    _ferry("Ferris Laida"),
    _TAX,
    _prop("Atxarre", "Mendi", 120),
    _prop("San Miguel", "Mendi", 130),
    _prop("Omako Basoa", "Mendi", 140),
    _GO_TO_JAIL,
    _prop("Gruas Arego", "Itsaso", 150),
    _prop("Talleres Arteaga", "Itsaso", 160),
    _rail("Metro Arteaga Urias"),
    _TAX,
    _EVENT,
    _prop("Casa Rural Ozollo", "Arrantzale", 170),
    _prop("Aberasturi", "Arrantzale", 180),
    _util("Iberduero Luz"),
    _bus("Bizkaibus Mendialdua"),
    _cell(TileType.JAIL, "Carcel"),
    _prop("Bird Center", "Guggen", 190),
    _prop("Autokarabanak", "Guggen", 200),
    _TAX,
    _casino("Casino Blackjack"),
    _prop("Txokoa", "Rojo", 210),
    _prop("Cocina Pablo", "Rojo", 220),
    _prop("Casa Minte", "Rojo", 230),
    _rail("Metro Islas"),
    _TAX,
    _cell(TileType.PARK, "Parkie"),
    _prop("Marko Pollo", "Naranja", 240),
    _prop("Arketas", "Naranja", 250),
    _ferry("Ferris Mundaka"),
    _GO_TO_JAIL,
    _EVENT,
    _prop("Joshua's", "Amarillo", 260),
    _prop("Santana Esnekiak", "Amarillo", 270),
    _prop("Klinika Dental Arteaga", "Amarillo", 280),
    _bus("Bizkaibus Muruetagane"),
    _TAX,
    _prop("Kanala Bitch", "Verde", 290),
    _prop("Kanaleko Tabernie", "Verde", 300),
    _air("Loiu"),
    _rail("Metro Portuas"),
    _EVENT,
    _prop("Baratze", "Azul", 310),
    _prop("Eskolie", "Azul", 320),
    _TAX,
    TileDefinition(TileType.PROPERTY, "Fiore", 240, "fiore", TileSubtype.FIORE),
    _prop("Garbigune", "Cian", 330),
    _prop("Padura", "Cian", 340),
    _prop("Santanako Desaguie", "Cian", 350),
    _bus("Bizkaibus Ibarrekozubi"),
    _TAX,
    _prop("Farmazixe", "Rosa", 360),
    _prop("Medikue", "Rosa", 370),
    _air("Ozolloko Aireportue"),
    _GO_TO_JAIL,
    _EVENT,
    _prop("Frontoie", "Baserri", 380),
    _prop("Skateko Pistie", "Baserri", 390),
    _prop("Txarlin Pistie", "Baserri", 400),
    _rail("Metro Ozollo"),
    _TAX,
    _prop("Txopebenta", "Sirimiri", 410),
    _prop("Jaunsolo Molino", "Sirimiri", 420),
    _casino("Casino Ruleta"),
    _prop("Lezika", "Bilbo", 430),
    _prop("Bernaetxe", "Bilbo", 440),
    _prop("Baserri Maitea", "Bilbo", 450),
    _GO_TO_JAIL,
    _TAX,
    _EVENT,
    _prop("Artiako Kanterie", "Gaztelugatxe", 460),
    _prop("Erenokoa Ez Dan Kanterie", "Gaztelugatxe", 470),
    _prop("Artiako GYM-e", "Nervion", 480),
    _prop("Erenoko GYM-e", "Nervion", 490),
    _prop("Frontoiko Bici estatikak", "Nervion", 500),
    _cell(TileType.SLOTS, "Tragaperras"),
    _prop("Solabe", "Txistorra", 510),
    _prop("Katxitxone", "Txistorra", 520),
    _prop("San Antolin", "Sagardoa", 530),
    _prop("Farolak", "Sagardoa", 540),
    _prop("Santi Mamine", "Kaiku", 550),
    _prop("Portuaseko Kobazuloa", "Kaiku", 560),
    _prop("Hemingway Etxea", "Zorionak", 570),
    _prop("Etxealaia", "Zorionak", 580),
    _cell(TileType.PARK, "Parkie"),
    _prop("Kastillue", "Loiu", 590),
    _prop("Errota", "Loiu", 600),
    _GO_TO_JAIL,
    _cell(TileType.BANK, "Banca corrupta"),
    _cell(TileType.SLOTS, "Tragaperras"),
    _cell(TileType.BANK, "Banca corrupta"),
    _cell(TileType.EVENT, "Obras Publicas"),
    _cell(TileType.EVENT, "Manifestacion"),
    _cell(TileType.EVENT, "Dia Festivo"),
)
