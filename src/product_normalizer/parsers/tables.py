"""
Centralized lookup tables for Bulgarian grocery product names.

Each *_GROUPS table maps one canonical value to the spellings seen on
receipts: Cyrillic, Latin transliteration and common OCR misreads. Entries are
written in cleaned form (lowercase, single spaces, no punctuation). Lookups
also go through a transliteration skeleton, so a group only needs one spelling
per distinct skeleton.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from product_normalizer.utils.normalization import script_skeleton

FALLBACK_BASE_PRODUCT = "продукт"

BASE_PRODUCT_GROUPS = MappingProxyType({
    # Dairy
    'мляко': ('мляко', 'млеко', 'mleko', 'mlqko', 'mlyako', 'milk'),
    'кисело мляко': ('кисело мляко', 'kiselo mleko'),
    'айрян': ('айрян', 'айран', 'ayran'),
    'сирене': ('сирене', 'sirene', 'cheese'),
    'кашкавал': ('кашкавал', 'kashkaval'),
    'йогурт': ('йогурт', 'jogurt', 'yogurt', 'yoghurt'),
    'масло': ('масло', 'maslo', 'butter'),
    'извара': ('извара', 'izvara'),
    'сметана': ('сметана', 'smetana'),
    'яйца': ('яйца', 'яйце', 'яица', 'jajca', 'eggs'),

    # Bakery
    'хляб': ('хляб', 'хлеб', 'hlqb', 'hleb', 'bread'),
    'питка': ('питка', 'pitka'),
    'франзела': ('франзела', 'franzela'),
    'багета': ('багета', 'bageta'),
    'кифла': ('кифла', 'кифли', 'kifla', 'kifli'),
    'козунак': ('козунак', 'kozunak'),

    # Meat and fish
    'месо': ('месо', 'meso', 'meat'),
    'пилешко': ('пилешко', 'пилешки', 'пилешка', 'пиле', 'pileshko'),
    'свинско': ('свинско', 'свински', 'свинска', 'svinsko'),
    'говеждо': ('говеждо', 'говежди', 'говежда', 'govezhdo'),
    'кайма': ('кайма', 'kayma'),
    'салам': ('салам', 'salam', 'salami'),
    'шунка': ('шунка', 'shunka'),
    'луканка': ('луканка', 'lukanka'),
    'суджук': ('суджук', 'sudzhuk', 'sudjuk'),
    'наденица': ('наденица', 'nadenitsa'),
    'бекон': ('бекон', 'bekon', 'bacon'),
    'кебапче': ('кебапче', 'кебапчета', 'kebapche', 'kebapcheta'),
    'риба': ('риба', 'riba', 'fish'),
    'риба тон': ('риба тон', 'riba ton', 'tuna'),
    'сьомга': ('сьомга', 'syomga', 'somga'),
    'скумрия': ('скумрия', 'skumriya'),

    # Vegetables and fruit
    'домат': ('домат', 'домати', 'domat', 'domati'),
    'краставица': ('краставица', 'краставици', 'krastavitsa', 'krastavitsi'),
    'чушка': ('чушка', 'чушки', 'chushka', 'chushki'),
    'лук': ('лук', 'luk'),
    'картоф': ('картоф', 'картофи', 'kartof', 'kartofi'),
    'морков': ('морков', 'моркови', 'morkov', 'morkovi'),
    'зеле': ('зеле', 'зелка', 'zele'),
    'чесън': ('чесън', 'chesan'),
    'ябълка': ('ябълка', 'ябълки', 'yabalka', 'yabalki'),
    'банан': ('банан', 'банани', 'banan', 'banani'),
    'портокал': ('портокал', 'портокали', 'portokal', 'portokali'),
    'лимон': ('лимон', 'лимони', 'limon', 'limoni'),
    'мандарина': ('мандарина', 'мандарини', 'mandarina', 'mandarini'),
    'грозде': ('грозде', 'grozde'),

    # Staples
    'захар': ('захар', 'zahar', 'sugar'),
    'сол': ('сол', 'sol', 'salt'),
    'брашно': ('брашно', 'brashno', 'flour'),
    'ориз': ('ориз', 'oriz', 'rice'),
    'макарони': ('макарони', 'makaroni'),
    'спагети': ('спагети', 'spageti', 'spaghetti'),
    'олио': ('олио', 'olio'),
    'зехтин': ('зехтин', 'zehtin'),
    'оцет': ('оцет', 'otset'),
    'кетчуп': ('кетчуп', 'ketchup'),
    'майонеза': ('майонеза', 'mayoneza'),
    'лютеница': ('лютеница', 'lyutenitsa'),

    # Drinks
    'вода': ('вода', 'voda', 'water'),
    'сок': ('сок', 'sok', 'juice'),
    'кафе': ('кафе', 'kafe', 'coffee'),
    'чай': ('чай', 'chay', 'tea'),
    'бира': ('бира', 'bira', 'beer'),
    'вино': ('вино', 'vino', 'wine'),
    'какао': ('какао', 'kakao'),
    'кока кола': ('кока кола', 'coca cola', 'cocacola'),

    # Snacks
    'шоколад': ('шоколад', 'shokolad', 'chocolate'),
    'чипс': ('чипс', 'chips'),
    'бисквити': ('бисквити', 'бисквита', 'biskviti'),
    'вафла': ('вафла', 'вафли', 'vafla', 'vafli'),
    'бонбони': ('бонбони', 'bonboni'),
    'кириешки': ('кириешки', 'kirieshki'),

    # Household and personal care
    'шампоан': ('шампоан', 'shampoan', 'shampoo'),
    'паста за зъби': ('паста за зъби', 'pasta za zabi', 'toothpaste'),
    'сапун': ('сапун', 'sapun', 'soap'),
    'тоалетна хартия': ('тоалетна хартия', 'toaletna hartiya'),
    'прах за пране': ('прах за пране', 'prah za prane'),
    'препарат': ('препарат', 'preparat'),
})

BRAND_GROUPS = MappingProxyType({
    # Dairy
    'Vereia': ('верея', 'vereia'),
    'Milkovia': ('милковия', 'milkovia'),
    'Bor Chvor': ('бор чвор', 'bor chvor', 'bor cvor'),
    'Valio': ('валио', 'valio'),
    'BDS': ('бдс', 'bds'),
    'Rodopsko': ('родопско', 'rodopsko'),
    'Zagora': ('загора', 'zagora'),
    'Balkanika': ('балканика', 'balkanika'),
    'Vitosha': ('витоша', 'vitosha'),
    'Danone': ('данон', 'danone', 'danon'),
    'Alpro': ('алпро', 'alpro'),
    'Arla': ('арла', 'arla'),

    # Bakery
    'Dobrudzha': ('добруджа', 'dobrudzha', 'dobrudja'),

    # Meat
    'Madzharov': ('маджаров', 'madzharov', 'madjarov'),
    'Tandem': ('тандем', 'tandem'),
    'Elena': ('елена', 'elena'),

    # Beverages
    'Coca Cola': ('кока кола', 'coca cola', 'cocacola'),
    'Pepsi': ('пепси', 'pepsi'),
    'Fanta': ('фанта', 'fanta'),
    'Sprite': ('спрайт', 'sprite'),
    'Bankya': ('банкя', 'bankya'),
    'Devin': ('девин', 'devin'),
    'Gorna Banya': ('горна баня', 'gorna banya', 'gorna bania'),
    'Kamenitza': ('каменица', 'kamenitza', 'kamenitsa'),
    'Zagorka': ('загорка', 'zagorka'),
    'Shumensko': ('шуменско', 'shumensko'),

    # Snacks
    'Kirieshki': ('кириешки', 'kirieshki'),
    'Chipita': ('чипита', 'chipita'),
    'Nestle': ('нестле', 'nestle'),
    'Milka': ('милка', 'milka'),
    'Ritter Sport': ('ритер спорт', 'ritter sport'),
    'Heinz': ('хайнц', 'heinz'),

    # Personal care
    'Pantene': ('пантин', 'pantene'),
    'Colgate': ('колгейт', 'colgate'),
    'Nivea': ('нивеа', 'nivea'),
})

TYPE_GROUPS = MappingProxyType({
    'прясно': ('прясно', 'prqsno', 'fresh'),
    'кисело': ('кисело', 'kiselo'),
    'бяло': ('бяло', 'бяла', 'bjalo', 'belo'),
    'бял': ('бял', 'bjal', 'bel'),
    'жълто': ('жълто', 'zhalto'),
    'черен': ('черен', 'черна', 'cheren'),
    'ръжен': ('ръжен', 'razhen'),
    'пресован': ('пресован', 'presovan'),
    'краве': ('краве', 'krave'),
    'овче': ('овче', 'ovche'),
    'козе': ('козе', 'koze'),
    'зрял': ('зрял', 'zryal'),
    'топено': ('топено', 'topeno'),
    'пастьоризирано': ('пастьоризирано', 'pasteurized'),
    'минерална': ('минерална', 'mineralna'),
    'изворна': ('изворна', 'izvorna'),
    'газирана': ('газирана', 'gazirana'),
    'негазирана': ('негазирана', 'negazirana'),
    'натурален': ('натурален', 'naturalen'),
})

ATTRIBUTE_GROUPS = MappingProxyType({
    'био': ('био', 'bio', 'еко', 'eco', 'organic', 'органик', 'органично'),
    'безлактозно': ('безлактозно', 'bezlaktozno', 'lactose free'),
    'пълномаслено': ('пълномаслено', 'full fat'),
    'нискомаслено': ('нискомаслено', 'нископроцентно', 'low fat'),
    'обезмаслено': ('обезмаслено', 'skimmed'),
    'пълнозърнест': ('пълнозърнест', 'пълнозърнеста', 'palnozarnest', 'whole grain'),
    'без глутен': ('без глутен', 'gluten free'),
    'без захар': ('без захар', 'no sugar', 'sugar free'),
    'веган': ('веган', 'vegan'),
    'соево': ('соево', 'соева', 'soevo', 'soy'),
    'light': ('light', 'лайт'),
    'zero': ('zero', 'зеро'),
})

UNIT_GROUPS = MappingProxyType({
    'л': ('л', 'l', 'lt', 'ltr', 'литър', 'литра', 'литри'),
    'мл': ('мл', 'ml'),
    'г': ('г', 'гр', 'грам', 'грама', 'g', 'gr', 'grm'),
    'кг': ('кг', 'kg', 'килограм', 'килограма'),
    'бр': ('бр', 'брой', 'броя', 'br', 'pcs', 'шт'),
})

PRODUCT_SYNONYMS = MappingProxyType({
    'мляко': ('milk', 'mleko', 'млеко'),
    'хляб': ('bread', 'hleb', 'хлеб'),
    'масло': ('butter', 'maslo'),
    'сирене': ('cheese', 'sirene', 'white cheese'),
    'кашкавал': ('kashkaval', 'yellow cheese'),
    'йогурт': ('yogurt', 'jogurt', 'кисело мляко'),
    'кисело мляко': ('yogurt', 'йогурт', 'kiselo mleko'),
    'яйца': ('eggs', 'jajca', 'яйце'),
    'вода': ('water', 'voda'),
    'сок': ('juice', 'sok'),
    'месо': ('meat', 'meso'),
    'салам': ('salami', 'salam'),
    'риба': ('fish', 'riba'),
    'кафе': ('coffee', 'kafe'),
    'чай': ('tea', 'chay'),
    'бира': ('beer', 'bira'),
    'захар': ('sugar', 'zahar'),
    'ориз': ('rice', 'oriz'),
    'кока кола': ('coca cola', 'cola'),
})

STOP_WORDS = frozenset({
    'за', 'с', 'със', 'от', 'и', 'в', 'на', 'по', 'до', 'без', 'или',
    'the', 'and', 'with', 'for', 'of', 'x', 'х',
})


def _invert(groups: Mapping[str, Tuple[str, ...]]) -> Dict[str, str]:
    """Flattens {canonical: variants} into {variant: canonical}."""
    index = {}
    for canonical, variants in groups.items():
        for variant in (canonical, *variants):
            index.setdefault(variant.lower(), canonical)
    return index


def _skeleton_index(index: Mapping[str, str]) -> Dict[str, str]:
    skeletons = {}
    for variant, canonical in index.items():
        skeletons.setdefault(phrase_skeleton(variant), canonical)
    return skeletons


def phrase_skeleton(phrase: str) -> str:
    """Skeleton of a multi-word phrase, word by word."""
    return ' '.join(script_skeleton(word) for word in phrase.split())


@dataclass(frozen=True)
class LookupTables:
    """
    Read-only bundle of every table the parser consults.

    Build alternate bundles with `LookupTables.from_groups(...)` to test the
    parser against different vocabularies.
    """
    base_products: Mapping[str, str]
    brands: Mapping[str, str]
    types: Mapping[str, str]
    attributes: Mapping[str, str]
    units: Mapping[str, str]
    synonyms: Mapping[str, Tuple[str, ...]]
    stop_words: FrozenSet[str]
    max_phrase_len: int = 3
    _skeletons: Mapping[str, Mapping[str, str]] = field(init=False, repr=False, compare=False)
    _known_base_products: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        skeletons = {
            'base': _skeleton_index(self.base_products),
            'brand': _skeleton_index(self.brands),
            'type': _skeleton_index(self.types),
            'attribute': _skeleton_index(self.attributes),
        }
        object.__setattr__(
            self, '_skeletons',
            MappingProxyType({k: MappingProxyType(v) for k, v in skeletons.items()})
        )
        object.__setattr__(self, '_known_base_products', frozenset(self.base_products.values()))

    @classmethod
    def from_groups(
        cls,
        base_products: Mapping[str, Tuple[str, ...]] = BASE_PRODUCT_GROUPS,
        brands: Mapping[str, Tuple[str, ...]] = BRAND_GROUPS,
        types: Mapping[str, Tuple[str, ...]] = TYPE_GROUPS,
        attributes: Mapping[str, Tuple[str, ...]] = ATTRIBUTE_GROUPS,
        units: Mapping[str, Tuple[str, ...]] = UNIT_GROUPS,
        synonyms: Mapping[str, Tuple[str, ...]] = PRODUCT_SYNONYMS,
        stop_words: FrozenSet[str] = STOP_WORDS,
    ) -> "LookupTables":
        return cls(
            base_products=MappingProxyType(_invert(base_products)),
            brands=MappingProxyType(_invert(brands)),
            types=MappingProxyType(_invert(types)),
            attributes=MappingProxyType(_invert(attributes)),
            units=MappingProxyType(_invert(units)),
            synonyms=MappingProxyType({k: tuple(v) for k, v in synonyms.items()}),
            stop_words=frozenset(w.lower() for w in stop_words),
        )

    def _lookup(self, kind: str, index: Mapping[str, str], phrase: str) -> Optional[str]:
        key = phrase.lower()
        if key in index:
            return index[key]
        return self._skeletons[kind].get(phrase_skeleton(key))

    def lookup_base_product(self, phrase: str) -> Optional[str]:
        return self._lookup('base', self.base_products, phrase)

    def lookup_brand(self, phrase: str) -> Optional[str]:
        return self._lookup('brand', self.brands, phrase)

    def lookup_type(self, phrase: str) -> Optional[str]:
        return self._lookup('type', self.types, phrase)

    def lookup_attribute(self, phrase: str) -> Optional[str]:
        return self._lookup('attribute', self.attributes, phrase)

    def lookup_unit(self, unit: str) -> Optional[str]:
        # Units are short enough that skeleton folding would collide (l/л, g/г)
        return self.units.get(unit.lower())

    def synonyms_for(self, base_product: str) -> Tuple[str, ...]:
        return self.synonyms.get(base_product, ())

    def is_known_base_product(self, value: str) -> bool:
        return value in self._known_base_products

    def is_stop_word(self, token: str) -> bool:
        return token.lower() in self.stop_words


DEFAULT_TABLES = LookupTables.from_groups()
