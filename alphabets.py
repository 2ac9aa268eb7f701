# alphabets.py
import string

ALPHABET = string.ascii_uppercase

# English letters, most frequent first; the plugboard search tries pairs in this order
FREQUENCY_ORDER = "ETAOINSHRDLCUMWFGYPBVKJXQZ"
