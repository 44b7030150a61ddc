"""
Static dictionaries and tuning constants for the parsing engine.

Every score threshold used by the matcher lives in CONFIDENCE so the
components agree on one set of numbers.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern


@dataclass(frozen=True)
class ConfidenceTable:
    """Named scores and thresholds (all on the 0-100 confidence scale)."""
    EXACT_MATCH: int = 100
    EXPANDED_NAME: int = 98
    ALIAS_EXPANSION: int = 97
    DIRECT_MATCH: int = 85
    CONTAINMENT_HIGH: int = 85
    CONTAINMENT_LOW: int = 80
    COMMON_ALIAS: int = 80
    COMMON_ALIAS_EXPANDED: int = 78
    SINGLE_LONG_WORD: int = 55
    SINGLE_MEDIUM_WORD: int = 50
    SPEC_WORD: int = 40
    FUZZY_MINIMUM: int = 50
    FUZZY_ALIAS_MINIMUM: int = 55
    FUZZY_CAP: int = 92
    COMMUNITY_BASE: int = 55
    COMMUNITY_MAX: int = 75
    CONFLICT_DIFF_THRESHOLD: int = 15
    MERGE_RANGE: int = 10
    # Hand-tuned; subtracted from fuzzy scores when the field belongs to a
    # different category than the one detected for the text.
    CATEGORY_MISMATCH_PENALTY: int = 25


CONFIDENCE = ConfidenceTable()


KNOWN_BRANDS: List[str] = [
    'Sony', 'Canon', 'Nikon', 'Panasonic', 'Blackmagic', 'RED', 'ARRI', 'Fujifilm', 'Fuji', 'Leica',
    'Zeiss', 'Sigma', 'Tamron', 'Tokina', 'Rokinon', 'Samyang', 'Voigtlander',
    'Sennheiser', 'Rode', 'Røde', 'Shure', 'Audio-Technica', 'Zoom', 'Tascam', 'Sound Devices',
    'Aputure', 'Godox', 'Profoto', 'Broncolor', 'Litepanels', 'Kino Flo', 'Nanlite', 'Astera',
    'DJI', 'Zhiyun', 'Manfrotto', 'Gitzo', 'Sachtler', 'Tilta', 'SmallRig', 'Wooden Camera',
    'Atomos', 'SmallHD', 'Teradek', 'Hollyland', 'SanDisk', 'Samsung', 'Lexar', 'ProGrade',
    'Apple', 'Blackmagic Design', 'Davinci', 'Avid', 'Neewer', 'Elgato',
    'K-Tek', 'Rycote', 'Bubblebee', 'Lectrosonics', 'Wisycom', 'Zaxcom',
    'Cooke', 'Angenieux', 'Fujinon', 'Schneider', 'Tiffen', 'Lee Filters', 'NiSi',
    'Matthews', 'Avenger', 'Kupo', 'American Grip', 'Modern Studio',
    'OConnor', 'Vinten', 'Miller', 'Cartoni', 'Libec', 'Benro', 'Peak Design',
    'Sanken', 'DPA', 'Schoeps', 'Neumann', 'AKG', 'Beyerdynamic',
    'Anton Bauer', 'IDX', 'Core SWX', 'Hawk-Woods', 'Bebob',
    'Dedolight', 'Mole-Richardson', 'Quasar Science',
    'Pelican', 'SKB', 'Nanuk', 'Porta Brace', 'Tenba', 'Think Tank',
    'Deity', 'Tentacle Sync', 'Timecode Systems',
]

CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    'Cameras': ['camera', 'camcorder', 'cinema camera', 'mirrorless', 'dslr', 'sensor type', 'video camera', 'digital camera'],
    'Lenses': ['lens', 'focal length', 'aperture', 'f/', 'prime lens', 'zoom lens', 'wide angle', 'telephoto', 'anamorphic'],
    'Lighting': ['light', 'led', 'strobe', 'flash', 'softbox', 'panel', 'fresnel', 'rgb light', 'bi-color', 'watt', 'lumen', 'fixture'],
    'Audio': ['microphone', 'mic', 'audio', 'recorder', 'wireless system', 'lavalier', 'shotgun', 'boom pole', 'preamp', 'mixer'],
    'Support': ['tripod', 'monopod', 'gimbal', 'stabilizer', 'fluid head', 'slider', 'dolly', 'jib', 'crane', 'rig'],
    'Grip': ['c-stand', 'grip head', 'arm', 'clamp', 'flag', 'frame', 'silk', 'net', 'scrim', 'gobo', 'sandbag'],
    'Accessories': ['battery', 'charger', 'cable', 'adapter', 'mount', 'cage', 'filter', 'hood', 'follow focus'],
    'Storage': ['card', 'ssd', 'drive', 'memory card', 'cfast', 'sd card', 'storage', 'cfexpress'],
    'Monitors': ['monitor', 'display', 'screen', 'viewfinder', 'evf', 'on-camera monitor', 'field monitor'],
    'Power': ['v-mount', 'gold mount', 'power supply', 'battery plate', 'ac adapter', 'battery pack'],
    'Consumables': ['tape', 'gel', 'diffusion', 'gaffer', 'expendable'],
}

# Product words that mark a free-standing line as a likely product name
PRODUCT_NAME_WORDS = re.compile(
    r'\b(camera|lens|light|mic|microphone|tripod|monitor|recorder|flash|strobe|gimbal|'
    r'stabilizer|wireless|transmitter|receiver|boom|shotgun|panel|fixture|battery|card)\b',
    re.IGNORECASE,
)

ABBREVIATIONS: Dict[str, str] = {
    'freq': 'frequency', 'temp': 'temperature', 'max': 'maximum', 'min': 'minimum',
    'mic': 'microphone', 'res': 'resolution', 'conn': 'connector', 'dim': 'dimensions',
    'wt': 'weight', 'bat': 'battery', 'batt': 'battery', 'vol': 'voltage',
    'pwr': 'power', 'cap': 'capacity', 'compat': 'compatibility',
    'stab': 'stabilization', 'adj': 'adjustment', 'diam': 'diameter',
    'ht': 'height', 'len': 'length', 'sens': 'sensitivity', 'imp': 'impedance',
    'approx': 'approximate', 'incl': 'included', 'info': 'information',
    'spec': 'specification', 'specs': 'specifications', 'num': 'number',
    'qty': 'quantity', 'ext': 'extended', 'dia': 'diameter', 'opt': 'optical',
    'mech': 'mechanical', 'elec': 'electronic', 'def': 'definition',
    'vid': 'video', 'aud': 'audio', 'rec': 'recording', 'cont': 'continuous',
    'std': 'standard',
}

# Ignored when counting token overlap in similarity scoring
STOP_WORDS = frozenset({
    'type', 'size', 'rate', 'range', 'mode', 'with', 'from', 'for', 'the', 'and',
    'max', 'min', 'output', 'input', 'total', 'number', 'system', 'included',
    'support', 'supported', 'compatible', 'maximum', 'minimum', 'speed', 'level',
    'control', 'depth', 'life', 'time', 'capacity', 'power', 'count', 'body',
    'recording', 'card', 'cable', 'mount', 'class', 'general', 'specification',
    'specifications', 'key', 'features', 'feature', 'details', 'detail', 'info',
    'information', 'other', 'additional', 'about', 'product', 'item',
})

# Words of a multi-word field name too vague to register on their own
GENERIC_WORDS = frozenset({
    'type', 'size', 'rate', 'range', 'mode', 'with', 'from', 'output', 'input',
    'total', 'number', 'system', 'included', 'support', 'supported', 'compatible',
    'maximum', 'minimum', 'speed', 'level', 'control', 'depth', 'life', 'time',
    'capacity', 'power', 'count', 'body', 'recording', 'card', 'cable', 'mount',
    'class', 'ratio', 'material', 'format', 'angle', 'length', 'height', 'weight',
    'draw', 'plate', 'points', 'slots', 'display', 'assist', 'color', 'load',
    'adjustment', 'rotation', 'position', 'noise', 'temp',
})

# Fields that appear across categories and skip the category-mismatch penalty
SHARED_FIELDS = frozenset({
    'Weight',
    'Dimensions',
    'Battery Type',
    'Battery Life',
    'Mount Type',
    'Power Input',
    'Material',
})

# Canonical field label -> labels seen on retailer and manufacturer pages
COMMON_ALIASES: Dict[str, List[str]] = {
    'sensor type': ['sensor', 'image sensor', 'sensor specification'],
    'sensor size': ['format', 'image circle', 'coverage', 'sensor format'],
    'effective pixels': ['megapixels', 'mp', 'resolution', 'pixel count', 'total pixels', 'image resolution'],
    'video resolution': ['video', 'video recording', 'movie recording', 'max video', '4k', '8k', 'video capability', 'recording resolution'],
    'frame rates': ['frame rate', 'fps', 'recording fps'],
    'mount type': ['lens mount', 'camera mount', 'bayonet'],
    'lens mount': ['mount', 'camera mount', 'mount type', 'bayonet mount'],
    'focal length': ['zoom range', 'focal range', 'fl'],
    'maximum aperture': ['max aperture', 'aperture', 'f-stop', 'fastest aperture', 'widest aperture', 'speed', 'wide open'],
    'minimum aperture': ['min aperture', 'smallest aperture'],
    'light type': ['lamp type', 'bulb type', 'light source', 'emitter type'],
    'max power output': ['power output', 'output power', 'wattage', 'watts', 'max power', 'power'],
    'color temperature': ['color temp', 'cct', 'kelvin', 'white balance'],
    'cct range': ['color temperature range', 'temp range', 'kelvin range'],
    'microphone type': ['mic type', 'transducer', 'capsule type'],
    'transducer type': ['capsule', 'element type'],
    'polar pattern': ['pickup pattern', 'pattern', 'directivity', 'directionality'],
    'frequency response': ['freq response', 'frequency range', 'bandwidth'],
    'output connector': ['connector', 'connection', 'connector type', 'output type'],
    'max payload': ['payload', 'payload capacity', 'max load', 'load capacity', 'maximum payload'],
    'capacity': ['storage capacity', 'total capacity', 'storage size'],
    'compatibility': ['compatible with', 'works with', 'supported devices'],
    'weight': ['body weight', 'total weight', 'net weight', 'unit weight', 'approx weight'],
    'dimensions': ['size', 'body size', 'measurements', 'lxwxh', 'exterior dimensions', 'overall dimensions', 'wxhxd'],
    'iso range': ['iso', 'iso sensitivity', 'iso speed', 'native iso'],
    'af system': ['autofocus', 'autofocus system', 'focus system', 'af type'],
    'af points': ['focus points', 'autofocus points', 'af coverage'],
    'stabilization': ['image stabilization', 'ibis', 'ois', 'vr', 'is', 'steady shot', 'sensor shift'],
    'wireless connectivity': ['wifi', 'wi-fi', 'bluetooth', 'wireless', 'nfc'],
    'battery life': ['shots per charge', 'battery duration', 'runtime'],
    'battery type': ['battery', 'power source', 'battery model'],
    'weather sealing': ['weather sealed', 'dust proof', 'moisture resistant', 'environmental sealing', 'splash proof'],
    'screen size': ['display size', 'lcd size', 'monitor size'],
    'panel type': ['display type', 'lcd type', 'screen type'],
    'brightness': ['luminance', 'nits', 'cd/m2', 'max brightness'],
    'read speed': ['max read', 'sequential read', 'read rate'],
    'write speed': ['max write', 'sequential write', 'write rate'],
    'image stabilization': ['stabilization', 'ois', 'lens stabilization', 'vr', 'is', 'optical stabilization'],
    'filter thread': ['filter size', 'front filter', 'front thread'],
    'self-noise': ['self noise', 'equivalent noise', 'noise level', 'noise floor'],
    'sensitivity': ['mic sensitivity', 'output level'],
    'max spl': ['maximum spl', 'max sound pressure', 'clipping level'],
    'cri': ['color rendering', 'color rendering index', 'ra'],
    'tlci': ['television lighting consistency', 'television lighting consistency index'],
    'beam angle': ['beam spread', 'coverage angle', 'field angle'],
    'power draw': ['power consumption', 'wattage', 'max draw', 'current draw'],
    'voltage': ['nominal voltage', 'output voltage', 'operating voltage'],
    'charge time': ['charging time', 'recharge time', 'full charge'],
    'head type': ['fluid head', 'head style', 'pan tilt head'],
    'max height': ['maximum height', 'extended height', 'full height'],
    'leg sections': ['sections', 'number of sections'],
    'support type': ['tripod type', 'stand type'],
    'min height': ['minimum height', 'lowest height'],
    'continuous shooting': ['burst rate', 'drive speed', 'continuous drive'],
    'shutter speed range': ['shutter speed', 'shutter range', 'mechanical shutter'],
    'lcd screen': ['lcd', 'rear display', 'rear screen'],
    'viewfinder type': ['evf', 'viewfinder', 'ovf', 'electronic viewfinder'],
    'memory card slots': ['card slots', 'media slots', 'memory slots'],
    'card types supported': ['supported cards', 'media type', 'compatible cards', 'card type'],
    'video output': ['hdmi output', 'video out', 'hdmi', 'sdi'],
    'audio input': ['mic input', 'audio in', 'microphone input', 'xlr input'],
    'optical design': ['lens construction', 'elements/groups', 'optical formula', 'lens design'],
    'diaphragm blades': ['aperture blades', 'iris blades', 'number of blades'],
    'minimum focus distance': ['mfd', 'close focus', 'closest focus', 'near limit', 'closest focusing distance'],
    'maximum magnification': ['max magnification', 'magnification ratio', 'reproduction ratio'],
    'autofocus': ['af', 'auto focus', 'focus motor'],
    'luminous flux (lm)': ['lumens', 'lumen output', 'lm', 'total output'],
    'illuminance (lux)': ['lux', 'lux output', 'lux at 1m'],
    'modifier mount': ['bowens mount', 'light modifier', 'accessory mount'],
    'wireless control': ['app control', 'remote control', 'bluetooth control'],
    'signal-to-noise ratio': ['snr', 's/n ratio', 'signal to noise'],
    'dynamic range': ['dr'],
    'phantom power': ['48v', 'phantom', 'p48'],
    'wireless frequency': ['frequency band', 'rf frequency', 'wireless band'],
    'wireless range': ['operating range', 'transmission range', 'rf range'],
    'capacity (wh)': ['watt hours', 'wh', 'energy capacity'],
    'capacity (mah)': ['mah', 'milliamp hours', 'amp hours'],
    'angle of view': ['aov', 'field of view', 'fov'],
    'af motor type': ['focus motor', 'af drive', 'af motor'],
    'lens format coverage': ['coverage', 'image circle', 'format coverage', 'sensor coverage'],
    'video format': ['codec', 'recording format', 'compression', 'video codec'],
    'bit depth': ['color depth', 'color bit depth'],
    'chroma subsampling': ['chroma', 'color subsampling', 'subsampling'],
    'hdr recording': ['hdr', 'hdr video', 'hlg', 'high dynamic range'],
    'af detection': ['af subject detection', 'subject tracking', 'eye af', 'face detection'],
    'viewfinder coverage': ['evf coverage', 'viewfinder magnification'],
    'body material': ['construction', 'chassis', 'body construction', 'housing'],
    'image processor': ['processor', 'engine', 'image engine', 'processing engine'],
    'cooling system': ['fan', 'cooling', 'active cooling', 'heat dissipation'],
    'storage type': ['media type', 'drive type', 'interface type'],
    'interface': ['connection type', 'bus type'],
    'form factor': ['card size', 'physical size'],
    'video speed class': ['v class', 'video class'],
    'aspect ratio': ['display ratio', 'screen ratio'],
    'contrast ratio': ['contrast', 'static contrast'],
    'color gamut': ['gamut', 'color space', 'rec 709', 'dci p3'],
    'touchscreen': ['touch', 'touch input', 'touch display'],
    'focus assist': ['peaking', 'focus peaking', 'punch in'],
    'chemistry': ['cell chemistry', 'cell type', 'battery chemistry'],
    'max discharge': ['continuous draw', 'max current', 'peak current'],
    'protection circuits': ['bms', 'protection', 'overcharge protection', 'safety features'],
    'airline approved': ['flight safe', 'airline safe', 'faa approved'],
    'grip type': ['stand type', 'clamp type', 'holder type'],
    'primary use': ['application', 'intended use', 'use case'],
    'material': ['build material', 'construction material'],
}


# =============================================================================
# Value sanity ranges
# =============================================================================

def _iso_in_range(value: str) -> bool:
    digits = re.search(r'\d+', value.replace(',', ''))
    if not digits:
        return False
    n = int(digits.group(0))
    return 0 < n <= 10_000_000


@dataclass(frozen=True)
class RangeRule:
    """Plausibility rule for one field's value."""
    pattern: Pattern[str]
    warn: str
    group: int = 0
    min: Optional[float] = None
    max: Optional[float] = None
    unit: Optional[str] = None
    check: Optional[Callable[[str], bool]] = None


_NUMBER = re.compile(r'[\d.]+')
_APERTURE = re.compile(r'f?/?(\d+\.?\d*)')

VALUE_RANGES: Dict[str, RangeRule] = {
    'Weight': RangeRule(_NUMBER, 'Weight over 100kg - verify value', max=100, unit='kg'),
    'Focal Length': RangeRule(_NUMBER, 'Focal length over 2000mm - verify value', max=2000, unit='mm'),
    'Maximum Aperture': RangeRule(_APERTURE, 'Unusual aperture value - verify', group=1, min=0.7, max=64),
    'Minimum Aperture': RangeRule(_APERTURE, 'Unusual aperture value - verify', group=1, min=0.7, max=128),
    'Max Power Output': RangeRule(_NUMBER, 'Power over 20kW - verify value', max=20000, unit='W'),
    'Screen Size': RangeRule(_NUMBER, 'Screen size over 100" - verify value', max=100, unit='inches'),
    'Max Height': RangeRule(_NUMBER, 'Height over 10m - verify value', max=10, unit='m'),
    'Battery Life': RangeRule(_NUMBER, 'Unusually high battery life - verify value', max=10000),
    'ISO Range': RangeRule(re.compile(r'[\d,]+'), 'ISO value out of expected range', check=_iso_in_range),
}


# =============================================================================
# Unit conversion factors
# =============================================================================

MM_PER_INCH = 25.4
GRAMS_PER_POUND = 453.592
GRAMS_PER_OUNCE = 28.3495

# Non-default currencies noted alongside a detected price
CURRENCY_NAMES: Dict[str, str] = {'€': 'EUR', '£': 'GBP', '¥': 'JPY/CNY'}
DEFAULT_CURRENCY = '$'

# Unit written after a number -> factor into a range rule's unit
UNIT_SCALES: Dict[str, Dict[str, float]] = {
    'kg': {'kg': 1, 'g': 0.001, 'lb': GRAMS_PER_POUND / 1000, 'lbs': GRAMS_PER_POUND / 1000,
           'oz': GRAMS_PER_OUNCE / 1000},
    'mm': {'mm': 1, 'cm': 10, 'm': 1000},
    'm': {'m': 1, 'cm': 0.01, 'mm': 0.001, 'ft': 0.3048, 'in': MM_PER_INCH / 1000},
    'W': {'w': 1, 'kw': 1000},
    'inches': {'in': 1, 'inch': 1, 'inches': 1, '"': 1, 'cm': 1 / 2.54, 'mm': 1 / MM_PER_INCH},
}
