# utils/book_names.py
# Short codes understood by BibleSuperSearch, keyed by full book name

OLD_TESTAMENT = {
    'Genesis': 'Gen',
    'Exodus': 'Exo',
    'Leviticus': 'Lev',
    'Numbers': 'Num',
    'Deuteronomy': 'Deu',
    'Joshua': 'Jos',
    'Judges': 'Jdg',
    'Ruth': 'Rth',
    '1 Samuel': '1Sa',
    '2 Samuel': '2Sa',
    '1 Kings': '1Ki',
    '2 Kings': '2Ki',
    '1 Chronicles': '1Ch',
    '2 Chronicles': '2Ch',
    'Ezra': 'Ezr',
    'Nehemiah': 'Neh',
    'Esther': 'Est',
    'Job': 'Job',
    'Psalms': 'Psa',
    'Proverbs': 'Pro',
    'Ecclesiastes': 'Ecc',
    'Song of Solomon': 'SoS',
    'Isaiah': 'Isa',
    'Jeremiah': 'Jer',
    'Lamentations': 'Lam',
    'Ezekiel': 'Eze',
    'Daniel': 'Dan',
    'Hosea': 'Hos',
    'Joel': 'Joe',
    'Amos': 'Amo',
    'Obadiah': 'Oba',
    'Jonah': 'Jon',
    'Micah': 'Mic',
    'Nahum': 'Nah',
    'Habakkuk': 'Hab',
    'Zephaniah': 'Zep',
    'Haggai': 'Hag',
    'Zechariah': 'Zec',
    'Malachi': 'Mal',
}

NEW_TESTAMENT = {
    'Matthew': 'Mat',
    'Mark': 'Mar',
    'Luke': 'Luk',
    'John': 'Joh',
    'Acts': 'Act',
    'Romans': 'Rom',
    '1 Corinthians': '1Co',
    '2 Corinthians': '2Co',
    'Galatians': 'Gal',
    'Ephesians': 'Eph',
    'Philippians': 'Php',
    'Colossians': 'Col',
    '1 Thessalonians': '1Th',
    '2 Thessalonians': '2Th',
    '1 Timothy': '1Ti',
    '2 Timothy': '2Ti',
    'Titus': 'Tit',
    'Philemon': 'Phm',
    'Hebrews': 'Heb',
    'James': 'Jam',
    '1 Peter': '1Pe',
    '2 Peter': '2Pe',
    '1 John': '1Jo',
    '2 John': '2Jo',
    '3 John': '3Jo',
    'Jude': 'Jud',
    'Revelation': 'Rev',
}

BOOK_SHORT_NAMES = {**OLD_TESTAMENT, **NEW_TESTAMENT}

# Common alternate spellings
_ALIASES = {
    'psalm': 'Psalms',
    'song of songs': 'Song of Solomon',
    "solomon's song": 'Song of Solomon',
    'revelations': 'Revelation',
}

_LOOKUP = {name.lower(): name for name in BOOK_SHORT_NAMES}
_LOOKUP.update(_ALIASES)


def short_name_for(book):
    """Short code for a book name (case-insensitive), or None if unknown."""
    canonical = _LOOKUP.get(' '.join(book.split()).lower())
    return BOOK_SHORT_NAMES[canonical] if canonical else None
