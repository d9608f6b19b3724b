from settings import SYMBOLS, ConfigurationError

# Define Morse code dictionary
MORSE_CODE = {
    'A': '.-', 'B': '-...', 'C': '-.-.', 'D': '-..', 'E': '.', 'F': '..-.',
    'G': '--.', 'H': '....', 'I': '..', 'J': '.---', 'K': '-.-', 'L': '.-..',
    'M': '--', 'N': '-.', 'O': '---', 'P': '.--.', 'Q': '--.-', 'R': '.-.',
    'S': '...', 'T': '-', 'U': '..-', 'V': '...-', 'W': '.--', 'X': '-..-',
    'Y': '-.--', 'Z': '--..', '0': '-----', '1': '.----', '2': '..---',
    '3': '...--', '4': '....-', '5': '.....', '6': '-....', '7': '--...',
    '8': '---..', '9': '----.',
    # Punctuation (ITU)
    '.': '.-.-.-', ',': '--..--', '?': '..--..', '\'': '.----.', '!': '-.-.--',
    '/': '-..-.', '(': '-.--.', ')': '-.--.-', '&': '.-...', ':': '---...',
    ';': '-.-.-.', '=': '-...-', '-': '-....-', '_': '..--.-', '$': '...-..-',
    '@': '.--.-.',
    # Prosigns
    '§': '...---...',  # SOS
    '+': '.-.-.',  # Wait
}

TARGET_WORDS = [
    "SOS", "CODE", "JAVA", "TEST", "LEARN", "MORSE", "TRAINER", "PROGRAM", "CAT", "HAT", "THE", "QUICK",
    "BROWN", "FOX", "JUMPED", "OVER", "THE", "LAZY", "DOG", "1", "2", "3", "4", "5", "6", "7", "8", "9",
    "0", "+",
]


def build_reverse_table(table):
    if not table:
        raise ConfigurationError("Morse code table is empty")

    reverse = {}
    for char, code in table.items():
        if not code or any(symbol not in SYMBOLS for symbol in code):
            raise ConfigurationError(f"Invalid code {code!r} for {char!r}")
        if code in reverse:
            raise ConfigurationError(f"Code {code!r} is shared by {reverse[code]!r} and {char!r}")
        reverse[code] = char
    return reverse


def lookup_code(reverse_table, code):
    # An empty code never matches an entry
    if not code:
        return None
    return reverse_table.get(code)


def reference_entries(table):
    return sorted(table.items())
