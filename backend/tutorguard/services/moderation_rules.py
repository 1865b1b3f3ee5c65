"""
Static rule table for chat moderation.

One PatternGroup per category. Patterns are plain regex sources matched
case-insensitively with search semantics; RuleEngine compiles them once.

Every gap between phrase fragments goes through _near(), which bounds it to
MAX_PATTERN_GAP characters so no rule can backtrack quadratically on long
attacker-controlled messages.
"""

from dataclasses import dataclass

from tutorguard.core.constants import MAX_PATTERN_GAP
from tutorguard.models.moderation import Category

_GAP = r".{0,%d}?" % MAX_PATTERN_GAP
_APOS = r"['’]?"
_WALLETS = r"(?:gcash|paymaya|paypal|venmo|zelle|cash\s?app|cashapp|coins\.ph)"
_CHAT_APPS = r"(?:fb|facebook|messenger|whatsapp|telegram|viber)"


def _near(*fragments: str) -> str:
    """Join phrase fragments with a bounded gap."""
    return _GAP.join(fragments)


@dataclass(frozen=True)
class PatternGroup:
    category: str
    description: str
    patterns: tuple[str, ...]


SEXUAL_CONTENT = PatternGroup(
    category=Category.SEXUAL_CONTENT.value,
    description="Sexual content, grooming, or inappropriate advances",
    patterns=(
        # Direct requests
        r"\bsend\s*(me\s*)?(nudes?|naked\s*(pic|picture|photo|image)s?)",
        r"\bsend\s*(me\s*)?(a\s*)?(sexy|hot|steamy|adult)\s*(pic|picture|photo|image|video)",
        r"\bshow\s*(me\s*)?(your\s*)?(body|breasts?|chest|private\s*parts?|ass|butt|dick|penis|vagina)\b",
        r"\bdo\s*you\s*have\s*(any\s*)?(naked|nude|sexy|hot)\s*(pic|picture|photo|image)s?",
        r"\bsend\s*something\s*(hot|steamy|adult|sexy|spicy)",
        r"\b(i\s*want\s*to\s*see|show\s*me)\s*(you\s*)?(without\s*clothes?|naked|nude)",
        r"\bsend\s*(me\s*)?(a\s*)?private\s*(video|pic|picture|photo)",
        r"\bsend\s*(me\s*)?pics?\s*(of\s*)?(you|yourself)\b",
        r"\bdo\s*you\s*want\s*to\s*do\s*something\s*(dirty|naughty|sexual)",
        r"\blet" + _APOS + r"s\s*sext\b",
        # Comments on appearance and body
        r"\byou\s*look\s*(so\s*)?(sexy|hot|gorgeous)\s*(in\s*(your\s*)?profile|in\s*that)",
        r"\byou\s*have\s*(a\s*|such\s*a\s*)?(nice|great|amazing|sexy|hot)\s*(body|figure|curves?|ass|butt|chest|breasts?)\b",
        r"\byour\s*(body|figure|curves?)\s*(is|are)\s*(so\s*)?(sexy|hot|amazing)",
        r"\byour\s*lips\s*look\s*(kissable|sexy|hot)",
        r"\byou\s*should\s*wear\s*(tighter|sexier|less)\s*clothes?",
        r"\bi\s*bet\s*you\s*look\s*amazing\s*in\s*(lingerie|underwear|bikini)",
        _near(r"\bwhy\s*do\s*you\s*dress\s*like\s*that", r"it" + _APOS + r"s\s*sexy"),
        r"\byour\s*(kid|child|student)" + _APOS + r"s?\s*tutor\s*is\s*(really\s*)?(sexy|hot)",
        # Flattery and innuendo
        r"\byou" + _APOS + r"re\s*(so\s*|too\s*|very\s*)?(fine|sexy|hot|cute|attractive)\b",
        r"\byou" + _APOS + r"re\s*too\s*(beautiful|gorgeous)\s*(to\s*be|for)\b",
        r"\byou\s*look\s*like\s*(a\s*)?(model|goddess|angel)\b",
        r"\bi\s*can" + _APOS + r"t\s*stop\s*thinking\s*(about\s*)?(how\s*)?(cute|sexy|hot|beautiful)\s*you\s*are",
        r"\byou" + _APOS + r"re\s*the\s*most\s*(attractive|beautiful|sexy|hot)\s*person\s*i\s*talk\s*to",
        r"\bi" + _APOS + r"m\s*thinking\s*(about\s*)?you\s*(in\s*a\s*)?(sexual|dirty|naughty)\s*way",
        r"\bi\s*had\s*(a\s*)?(dirty|sexual|wet)\s*dream\s*(about\s*)?you",
        r"\bwant\s*to\s*have\s*(some\s*)?fun\s*(later|tonight|with\s*me)",
        r"\bwanna\s*(have\s*)?(fun|play)\b",
        r"\byou\s*must\s*have\s*(guys?|girls?|people)\s*chasing\s*you",
        r"\bi\s*can\s*give\s*you\s*['\"“”]?extra\s*lessons?",
        r"\bi" + _APOS + r"m\s*sure\s*you\s*look\s*good\s*(without|in)\s*(your\s*)?(uniform|clothes?)",
        r"\bare\s*you\s*lonely\b",
        r"\bif\s*you\s*play\s*nice\s*,?\s*i" + _APOS + r"ll\s*treat\s*you",
        r"\byou" + _APOS + r"d\s*look\s*good\s*in\s*my\s*bed",
        r"\byou" + _APOS + r"re\s*my\s*type\b",
        _near(r"\bjust\s*kidding", r"unless\s*you\s*want"),
        _near(r"\btutor[-\s]?student\s*romance", r"joking"),
        r"\byour\s*(mom|dad|parent)\s*is\s*hot\b",
        # Boundary-crossing personal questions
        r"\bdo\s*you\s*have\s*(a\s*)?(boyfriend|girlfriend)\b",
        r"\bare\s*you\s*(a\s*)?virgin\b",
        r"\bare\s*you\s*dating\s*(anyone|someone)\b",
        r"\bhave\s*you\s*ever\s*kissed\s*someone",
        r"\bwhat\s*turns\s*you\s*on\b",
        r"\bwhat\s*are\s*you\s*wearing\b",
        r"\bdo\s*you\s*like\s*(older|younger)\s*(guys?|girls?|men|women)\b",
        r"\bi\s*like\s*talking\s*to\s*you\s*more\s*than\s*(kids?|people)\s*(your\s*)?age",
        r"\byou" + _APOS + r"re\s*(very\s*|so\s*)?mature\s*for\s*(your\s*)?age",
        # Role-play and fantasies
        r"\bimagine\s*(if\s*)?(we" + _APOS + r"re|we\s*were)\s*(alone|dating|together)\b",
        r"\bwhat\s*if\s*i\s*kiss\s*you\b",
        _near(r"\bi\s*dreamt?\s*(about\s*)?tutoring", r"you\s*were\s*naked"),
        r"\blet" + _APOS + r"s\s*pretend\s*we" + _APOS + r"re\s*dating",
        r"\bi\s*want\s*to\s*(hug|kiss|touch)\s*you\b",
        _near(r"\bcome\s*to\s*my\s*place", r"nobody\s*will\s*know"),
        r"\bwe\s*can\s*have\s*(some\s*)?fun\s*after\s*class",
        # Explicit terms
        r"\b(18\+|adult|nsfw|porn|xxx)",
        r"\b(horny|aroused)\b",
        r"\b(masturbat\w*|jerk\s*off|cum|orgasms?)\b",
        r"\b(dick|cock|penis|pussy|vagina|tits|boobs)\b",
        r"\bsex(y|ual)?\s*(chat|talk|video|call)",
    ),
)

THREATENING = PatternGroup(
    category=Category.THREATENING.value,
    description="Threats, violence, or harmful content",
    patterns=(
        r"\b(kill|hurt|harm|attack|beat|punch|hit)\s*(you|your|yourself)\b",
        r"\bi\s*will\s*(hurt|harm|kill|destroy)\b",
        r"\bi\s*hope\s*(you\s*(die|suffer|get\s*hurt|rot)|something\s*bad)",
        r"\b(die|death|dead)\b",
        r"\bself[-\s]?harm",
        r"\bsuicid(e|al)\b",
        r"\bcut\s*yourself\b",
    ),
)

HARASSMENT = PatternGroup(
    category=Category.HARASSMENT.value,
    description="Profanity, insults, bullying, or abusive language",
    patterns=(
        r"\b(fuck|fucking|fucked|fucker|fck|fuk)\b",
        r"\bf\*ck",
        r"\b(shit|sht|crap)\b",
        r"\bsh\*t",
        r"\b(bitch|btch)\b",
        r"\bb\*tch",
        r"\b(asshole|ahole|ass)\b",
        r"\ba\*\*hole",
        r"\b(bastard|bstrd)\b",
        r"\b(damn|dmn|dammit)\b",
        r"\b(idiot|stupid|dumb|moron|retard|retarded)\b",
        r"\b(hate|despise)\s*you\b",
        r"\b(ugly|fat|loser|worthless|useless)\b",
        r"\byou\s*(suck|are\s*trash|are\s*garbage|are\s*terrible|are\s*awful)\b",
        r"\bshut\s*(up|the\s*fuck\s*up)\b",
        r"\bgo\s*to\s*hell\b",
        r"\b(wtf|wth|omfg|stfu)\b",
        r"\byour?\s*(kid|child|student)\s*is\s*(stupid|dumb|slow|retarded)\b",
    ),
)

HATE_SPEECH = PatternGroup(
    category=Category.HATE_SPEECH.value,
    description="Discrimination, racism, or hate speech",
    patterns=(
        r"\byou\s*people\s*are\b",
        r"\ball\s*(of\s*)?you\s*(people|guys|women|men)\s*are\b",
        r"\bbecause\s*(of\s*)?(your|his|her)\s*(race|religion|gender|disability|condition)\b",
        r"\b(racist|sexist|homophobic|transphobic)\b",
    ),
)

OFF_PLATFORM_PAYMENT = PatternGroup(
    category=Category.OFF_PLATFORM_PAYMENT.value,
    description="Attempting to arrange payment outside the platform",
    patterns=(
        # Paying outside the platform
        r"\bcan\s*i\s*pay\s*(you\s*)?(directly|outside|off|privately|personally)\b",
        r"\bi" + _APOS + r"d\s*rather\s*pay\s*(you\s*)?(personally|directly)\b",
        r"\bpay\s*(me|us|you)?\s*(outside|off|directly|privately)\b",
        r"\bpayment\s*(outside|off|direct|private)",
        r"\bhandle\s*(this|payment|it)\s*(ourselves|privately|directly)\b",
        r"\blet" + _APOS + r"s\s*(just\s*)?settle\s*(the\s*)?payment\s*(privately|outside|directly|off)\b",
        r"\bi\s*want\s*to\s*pay\s*off\s*(the\s*)?(platform|app|website|system)\b",
        r"\bhow\s*do\s*i\s*pay\s*you\s*personally\b",
        r"\bcan\s*i\s*hire\s*you\s*privately\b",
        r"\bdo\s*you\s*allow\s*direct\s*payment",
        r"\bdo\s*tutors\s*accept\s*outside\s*payment",
        r"\bis\s*there\s*another\s*way\s*to\s*pay\b",
        r"\bdo\s*you\s*accept\s*other\s*forms\s*of\s*payment",
        # E-wallets and bank transfers
        r"\bwhat" + _APOS + r"s\s*your\s*(gcash|paymaya|paypal|bank)\s*(number|account)",
        r"\bdo\s*you\s*(accept|take)\s*(bank\s*transfer|" + _WALLETS + r")",
        r"\bgive\s*me\s*your\s*(bank\s*account|gcash|paymaya|paypal)\b",
        r"\bi" + _APOS + r"ll\s*pay\s*(via|through)\s*(bank|" + _WALLETS + r")",
        r"\b" + _WALLETS + r"\s*(number|account|transfer)",
        r"\bhere" + _APOS + r"s\s*my\s*(gcash|bank|paymaya|paypal|payment)\s*(number|account|details)",
        r"\bjust\s*transfer\s*to\s*my\s*(bpi|bdo|gcash|paymaya)\b",
        r"\bbank\s*(transfer|account|deposit|details)\b",
        r"\bwire\s*(transfer|money)\b",
        r"\bsend\s*(money|payment|cash)\s*(to|via|through)\b",
        _near(r"\bcan\s*i\s*send", r"\b(via|through|to)\s*(gcash|paymaya|paypal|bank)\b"),
        r"\b09\d{9}\b",  # PH mobile number
        r"\b\d{4}[-\s]?\d{4}[-\s]?\d{4}[-\s]?\d{4}\b",  # Card / account number
        # Cash in person
        r"\bi\s*can\s*pay\s*(you\s*)?cash\s*when\s*we\s*meet",
        r"\bi" + _APOS + r"ll\s*(just\s*)?hand\s*you\s*(the\s*)?money",
        _near(r"\bpay\b", r"\b(cash|in\s*person)\b"),
        _near(r"\bmeet\b", r"\b(cash|payment|money)\b"),
        _near(r"\bcash\s*is\s*easier", r"no\s*need\s*to\s*book"),
        # Avoiding platform fees
        r"\bcan\s*we\s*(skip|bypass)\s*(the\s*)?(system|platform|app|website)\s*fee",
        r"\blet" + _APOS + r"s\s*avoid\s*(the\s*)?(booking|service|platform|system)\s*fee",
        _near(r"\bit" + _APOS + r"s\s*cheaper\s*if\s*we\s*don" + _APOS + r"t\s*book", r"\bthrough\b"),
        _near(r"\bis\s*there\s*(a\s*)?way\s*to\s*skip", r"\bfee"),
        r"\bis\s*there\s*(a\s*)?way\s*to\s*make\s*it\s*cheaper",
        _near(r"\bavoid\b", r"\b(fee|fees|platform|app|website|system)\b"),
        _near(r"\b(cheaper|easier)\b", r"\b(outside|off|direct|directly|private|privately)\b"),
        r"\bskip\s*(the\s*)?(website|platform|app|fee|system)\b",
        _near(r"\bwithout\s*using", r"\b(platform|app|website|system)\b"),
        r"\bdon" + _APOS + r"t\s*book\s*(here|on\s*the\s*platform|through\s*the\s*app)",
        # Private deals
        r"\bcan\s*we\s*make\s*(a\s*)?(direct\s*deal|separate\s*agreement)",
        r"\blet" + _APOS + r"s\s*make\s*(our\s*own|a\s*separate)\s*payment\s*arrangement",
        r"\b(private|direct)\s*(deal|payment|transaction|arrangement)\b",
        r"\bour\s*own\s*(deal|arrangement|agreement)\b",
        r"\bcan\s*we\s*arrange\s*something\s*between\s*us\b",
        r"\bprivate\s*sessions\s*are\s*cheaper",
        r"\boff[-\s]?(platform|app|system|website)\s*(payment|deal|transaction|rate)",
        _near(r"\bdiscount\b", r"\bif\b", r"\b(direct|directly|private|privately|outside|off)\b"),
        _near(r"\bdo\s*you\s*have", r"\boutside\s*rate"),
        # Moving payment talk to another app
        _near(r"\b(message|add)\s*me\s*on\s*" + _CHAT_APPS + r"\b", r"\bpayment"),
        r"\blet" + _APOS + r"s\s*discuss\s*payment\s*on\s*" + _CHAT_APPS + r"\b",
        _near(r"\bi" + _APOS + r"ll\s*(dm|message)\s*you", r"\bpayment"),
        _near(r"\bcontact\s*me\s*(outside|privately)", r"\b(payment|money|cash)\b"),
        _near(r"\bnumber\b", r"\b(gcash|payment|money|cash|bank)\b"),
        _near(r"\b(facebook|messenger|fb|whatsapp|viber)\b", r"\b(gcash|payment|money|bank)\b"),
        _near(r"\b(gcash|payment|bank)\b", r"\b(facebook|messenger|fb|number)\b"),
    ),
)

CONTACT_EXCHANGE = PatternGroup(
    category=Category.CONTACT_EXCHANGE.value,
    description="Attempting to exchange contact information or move off-platform",
    patterns=(
        r"\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b",
        r"\b\d{4}[-.\s]?\d{3}[-.\s]?\d{4}\b",
        r"\b09\d{9}\b",
        r"(?<![\w+])\+?\d{1,3}[-.\s]?\d{3,4}[-.\s]?\d{3,4}(?!\d)",
        r"\b[a-z0-9._%+-]{1,64}@(?:[a-z0-9-]{1,63}\.){1,8}[a-z]{2,24}\b",
        r"\b(whatsapp|telegram|viber|signal|messenger|facebook|fb|instagram|ig|twitter|tiktok|discord)\b",
        r"\b(my|contact)\s*(number|email|phone|fb|facebook)\b",
        r"\b(text|call)\s*me\s*(at|on)\b",
        r"\breach\s*me\s*(at|on|via)\b",
        r"\b(add|message)\s*me\s*on\s*(fb|facebook|messenger|whatsapp|telegram)\b",
        r"\blet" + _APOS + r"s\s*(talk|chat|communicate|switch)\s*(on|to|via)\s*(fb|facebook|messenger|whatsapp|telegram)\b",
        r"\bcan\s*we\s*(talk|chat|communicate)\s*(on|via|through)\s*(fb|facebook|messenger|whatsapp|telegram)\b",
        r"\bhere" + _APOS + r"s\s*my\s*(number|email|fb|facebook|contact)\b",
    ),
)

EXTERNAL_LINKS = PatternGroup(
    category=Category.EXTERNAL_LINKS.value,
    description="Sharing external links or websites",
    patterns=(
        r"https?://(www\.)?[-a-z0-9@:%._+~#=]{1,256}\.[a-z0-9()]{1,6}\b",
        r"\bwww\.[a-z0-9-]{1,63}\.[a-z]{2,24}",
        r"\b(visit|check|go\s*to|click)\s*(my|our|this)?\s*(website|site|page|link)\b",
        r"\.(com|net|org|io|co|ph)\b",
        r"\bclick\s*(here|this|the\s*link)\b",
    ),
)

SPAM = PatternGroup(
    category=Category.SPAM.value,
    description="Spam, scams, or suspicious advertising",
    patterns=(
        r"\b(click\s*here|buy\s*now|limited\s*offer|act\s*now)\b",
        r"\b(earn|make)\s*\$?\d{1,9}\s*(per|a)\s*(day|hour|week)\b",
        r"\bwork\s*from\s*home\b",
        r"\b(guaranteed|100%)\s*(money|income|profit|free)\b",
        r"\bmulti[-\s]?level\s*marketing\b",
        r"\b(mlm|pyramid\s*scheme)\b",
        r"\b(free\s*prize|win\s*money|lottery)\b",
        r"\b(crypto|bitcoin|investment\s*opportunity)",
        r"\bphishing\b",
    ),
)

GROOMING = PatternGroup(
    category=Category.GROOMING.value,
    description="Grooming behavior or inappropriate boundary crossing",
    patterns=(
        r"\bmeet\s*(me\s*)?(alone|private|privately|secretly|in\s*private)\b",
        r"\blet" + _APOS + r"s\s*meet\s*(in\s*)?private",
        r"\bcan\s*we\s*see\s*each\s*other\s*(at\s*night|alone)\b",
        r"\bwe\s*can\s*meet\s*alone\b",
        r"\bdon" + _APOS + r"t\s*tell\s*(anyone|your\s*(parents?|mom|dad)|the\s*admin|others)\b",
        r"\byou\s*don" + _APOS + r"t\s*need\s*to\s*tell\s*anyone\b",
        _near(r"\bkeep\b", r"\b(secret|between\s*us|private|quiet)\b"),
        r"\b(our|this)\s*(is\s*(our\s*)?)?little\s*secret\b",
        r"\bspecial\s*(friend|relationship|bond)\b",
        r"\bjust\s*(between\s*)?(us|you\s*and\s*me)\b",
        r"\bwithout\s*(others|anyone)\s*knowing\b",
        _near(r"\blet" + _APOS + r"s\s*video\s*call", r"\bjust\s*us\b"),
        _near(r"\bi\s*can\s*help\s*you", r"\byou\s*need\s*to\s*be\s*nice\s*to\s*me"),
    ),
)

SENSITIVE_INFO = PatternGroup(
    category=Category.SENSITIVE_INFO.value,
    description="Sharing sensitive personal information",
    patterns=(
        r"\b(home|full|street)\s*address\b",
        r"\b\d{1,6}\s+(?:[a-z]+\s+){1,4}(?:street|st|avenue|ave|road|rd|drive|dr|blvd)\b",
        r"\b(ssn|social\s*security|passport|driver" + _APOS + r"s\s*license|id\s*number)\b",
        r"\b\d{3}-\d{2}-\d{4}\b",
        r"\b(credit\s*card|debit\s*card|card\s*number)\b",
        r"\bmy\s*(child|kid|student)" + _APOS + r"s?\s*id\b",
        r"\bwe\s*live\s*(at|in)\b",
    ),
)

RULE_TABLE: tuple[PatternGroup, ...] = (
    SEXUAL_CONTENT,
    THREATENING,
    HARASSMENT,
    HATE_SPEECH,
    OFF_PLATFORM_PAYMENT,
    CONTACT_EXCHANGE,
    EXTERNAL_LINKS,
    SPAM,
    GROOMING,
    SENSITIVE_INFO,
)
