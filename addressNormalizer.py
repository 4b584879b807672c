# pylint: disable=line-too-long, invalid-name

'''
Reconcile the address text read from a development application register against the gazetteer
and return a single canonical address - "<house number> <street name>, <suburb> <state> <postcode>".

There are two, mutually exclusive, ways of doing this; one for each register layout.

parseFreeTextAddress() - old format registers.
The address is one line of free text, such as "4,665 Princes HWY MENINGIE 5264".
The postcode and state are taken off the end, then the hundred or suburb is found by fuzzy matching
the trailing words against the gazetteer, then the street suffix is expanded and the street name found.
An address without a suburb (or an unambiguous hundred) is no use, so '' is returned.

parseMultiplexedAddress() - new format registers.
The house number, street and suburb are separate fields, but two or more addresses are sometimes
recorded in the same fields, separated by "ü". For example

    House Number: ü35
          Street: RAILWAYüSCHOOL TCE SOUTHüTERRA
          Suburb: PASKEVILLEüPASKEVILLE

should be read as "RAILWAY TCE SOUTH, PASKEVILLE" and "35 SCHOOL TERRA(CE), PASKEVILLE", whereas

    House Number: 79ü4
          Street: ROSSLYNüSWIFT WINGS ROADüROAD
          Suburb: WALLAROOüWALLAROO

should be read as "79 ROSSLYN ROAD, WALLAROO" and "4 SWIFT WINGS ROAD, WALLAROO".
Each street name has been broken in two and the first halves and the second halves joined into two groups,
with a single space joining the two groups. So "WALLACE STREET" and "MAY TERRACE" become "WALLACEüMAY STREETüTERRACE".
The street field is also truncated at 30 characters, so trailing "ü" characters can be missing.
Which space joins the two groups is ambiguous ("RAILWAY TERRACE SOUTH", "Kybunga Top Road"), so every
possible split is tried, each street name is fuzzy matched and the best address is returned.
None is returned if no address can be constructed.
'''

import sys
import re
import logging
import collections
import functools
from applicationRecords import FreeTextAddress, MultiplexedAddress, MULTIPLEX_DELIMITER
from fuzzyMatch import closestMatch, tieredMatch
from gazetteer import cleanName


STATES = ('ACT', 'NSW', 'NT', 'QLD', 'SA', 'TAS', 'VIC', 'WA')
DEFAULT_STATE = 'SA'
NO_ADDRESS_MARKER = 'NO RESIDENTIAL ADDRESS'
HUNDRED_PREFIXES = ('HD OF ', 'HUNDRED OF ', 'HD ', 'HUNDRED ')

HUNDRED_WORDS = 4           # The most trailing words that can be a hundred name
SUBURB_WORDS = 4            # The most trailing words that can be a suburb name
STREET_WORDS = 5            # The most trailing words that can be a street name
HUNDRED_FUZZ = 1
SUBURB_FUZZ = 1
STREET_FUZZ = 1
UNMATCHED_THRESHOLD = sys.maxsize       # The fuzz level of a street name that matched nothing

oneSpace = re.compile(r'\s\s+')
trailingDashes = re.compile(r'[\s\-–]*[\-–][\s\-–]*$')
blankAddress = re.compile(r'^[\s,0\-–]*$')
thousandsComma = re.compile(r'^(\d{1,2}),(\d{3})\b')
postcodePattern = re.compile(r'^\d{4}$')
postcodeEnd = re.compile(r'\b\d{4}$')
stateToken = re.compile(r'\b(' + '|'.join(STATES) + r')\b')


def cleanAddress(thisText):
    '''
Remove trailing dashes and collapse white space
    '''
    if thisText is None:
        return ''
    thisText = trailingDashes.sub('', str(thisText))
    return oneSpace.sub(' ', thisText).strip()


def isBlankAddress(thisText):
    return (blankAddress.match(thisText) is not None) or thisText.upper().startswith(NO_ADDRESS_MARKER)


def wordsText(words):
    '''
The text of a run of address words, for matching (commas are just separators)
    '''
    return cleanName(' '.join(words).replace(',', ' '))


def matchTrailingWords(tokens, maxWords, matcher):
    '''
Try the last maxWords words of tokens, then one less word, down to just the last word.
matcher(text) returns None for no match. On the first match the matched words are removed
from tokens and the match is returned.
    '''
    for length in range(min(maxWords, len(tokens)), 0, -1):
        thisMatch = matcher(wordsText(tokens[-length:]))
        if thisMatch is not None:
            del tokens[-length:]
            return thisMatch
    return None


def hundredMatcher(gazetteer):
    def matcher(thisText):
        for prefix in HUNDRED_PREFIXES:
            if thisText.startswith(prefix):
                return closestMatch(thisText[len(prefix):].strip(), gazetteer.hundredNames, HUNDRED_FUZZ)
        return None
    return matcher


def expandStreetSuffix(tokens, gazetteer):
    '''
Expand the street suffix (the last word) if it is an abbreviation (TCE to TERRACE)
    '''
    if len(tokens) == 0:
        return
    token = tokens.pop()
    suffix = token.rstrip(',')
    if suffix.upper() in gazetteer.streetSuffixes:
        tokens.append(gazetteer.streetSuffixes[suffix.upper()])
    elif suffix.upper() in gazetteer.suffixWords:
        tokens.append(suffix)
    else:
        tokens.append(token)


def addState(suburbName, state):
    '''
Put the state into the suburb, before the postcode, unless the suburb already has a state
    '''
    if stateToken.search(suburbName) is not None:
        return suburbName
    match = postcodeEnd.search(suburbName)
    if match is None:
        return f'{suburbName} {state}'
    return f'{suburbName[:match.start()].strip()} {state} {match.group(0)}'


def parseFreeTextAddress(address, gazetteer):
    '''
Reconcile a single line address. Returns the canonical address, or '' if no suburb could be found
    '''

    address = cleanAddress(address)
    if isBlankAddress(address):
        return ''
    address = thousandsComma.sub(r'\1\2', address)         # 4,665 is house number 4665

    tokens = address.split(' ')

    # The postcode
    postCode = None
    if (len(tokens) > 0) and (postcodePattern.match(tokens[-1].rstrip(',')) is not None):
        postCode = tokens.pop().rstrip(',')

    # The state
    state = DEFAULT_STATE
    if (len(tokens) > 0) and (tokens[-1].rstrip(',').upper() in STATES):
        state = tokens.pop().rstrip(',').upper()

    fallbackAddress = ' '.join(tokens + [state] + ([postCode] if postCode is not None else []))

    # A hundred name takes priority over a suburb name
    suburbName = None
    hundredName = matchTrailingWords(tokens, HUNDRED_WORDS, hundredMatcher(gazetteer))
    if hundredName is not None:
        hundredSuburbs = gazetteer.hundredNames[hundredName]
        logging.debug('parseFreeTextAddress - hundred (%s), suburbs (%s)', hundredName, repr(hundredSuburbs))
        if len(hundredSuburbs) == 1:
            suburbName = gazetteer.canonicalSuburb(hundredSuburbs[0])
    else:
        suburbKey = matchTrailingWords(tokens, SUBURB_WORDS, lambda thisText: closestMatch(thisText, gazetteer.suburbNames, SUBURB_FUZZ))
        if suburbKey is not None:
            suburbName = gazetteer.suburbNames[suburbKey]

    if suburbName is None:
        logging.info('Could not determine a suburb for the address "%s" (best guess "%s")', address, fallbackAddress)
        return ''

    # The street
    expandStreetSuffix(tokens, gazetteer)
    streetName = matchTrailingWords(tokens, STREET_WORDS, lambda thisText: closestMatch(thisText, gazetteer.streetNames, STREET_FUZZ))
    if streetName is None:
        streetName = ''

    # An explicit postcode is more reliable than the suburb's postcode
    if postCode is not None:
        if postcodeEnd.search(suburbName) is not None:
            suburbName = postcodeEnd.sub(postCode, suburbName)
        else:
            suburbName = f'{suburbName} {postCode}'
    suburbName = addState(suburbName, state)

    streetAddress = oneSpace.sub(' ', ' '.join(tokens + [streetName])).strip().rstrip(',').strip()
    if streetAddress == '':
        return suburbName.upper()
    return oneSpace.sub(' ', f'{streetAddress}, {suburbName}').strip().rstrip(',').upper()


class CandidateSplit:
    '''
One way of splitting the ambiguous (middle) street name token of a multiplexed street name.
group1 holds the first half of each street name, group2 the second half (the suffix).
    '''

    def __init__(self, group1, group2):
        self.group1 = group1
        self.group2 = group2
        self.hasInvalidHundredName = False      # a street name in this split looks like a hundred name, but isn't one

    def __repr__(self):
        return f'CandidateSplit({self.group1!r}, {self.group2!r}, hasInvalidHundredName={self.hasInvalidHundredName})'


AddressCandidate = collections.namedtuple('AddressCandidate', ['houseNumber', 'streetName', 'suburbName', 'threshold', 'split'])


def enumerateSplits(middleToken):
    '''
Every way of splitting the middle token in two at a space.
A token with no space (truncated) gets a trailing space, so there is always at least one split.
    '''
    if ' ' not in middleToken:
        middleToken += ' '
    words = middleToken.split(' ')
    return [(' '.join(words[:index]), ' '.join(words[index:])) for index in range(1, len(words))]


def buildCandidateSplits(streetName, addressCount):
    '''
Split the multiplexed street name into candidate pairs of groups, each of addressCount pieces.

For example "Kybunga TopüSmithüRailway South RoadüTerrace EastüTerrace" (three addresses) gives
    [Kybunga Top] [Smith] [Railway]        [South Road] [Terrace East] [Terrace]
    [Kybunga Top] [Smith] [Railway South]  [Road] [Terrace East] [Terrace]
    '''
    streetNameTokens = streetName.split(MULTIPLEX_DELIMITER)
    while len(streetNameTokens) < 2 * addressCount - 1:       # truncation loses trailing delimiters
        streetNameTokens.append('')
    middle = addressCount - 1
    splits = []
    for group1Piece, group2Piece in enumerateSplits(streetNameTokens[middle]):
        splits.append(CandidateSplit(streetNameTokens[:middle] + [group1Piece], [group2Piece] + streetNameTokens[middle + 1:]))
    return splits


def expandSuffixWords(streetSuffix, gazetteer):
    return ' '.join(gazetteer.expandSuffix(word) for word in streetSuffix.split(' '))


def addressComparer(a, b):
    '''
Order address candidates, better (house number, fewer spelling errors) first
    '''

    # With only one or two spelling errors prefer the address with a house number (even if it has more errors)
    if (a.threshold <= 2) and (b.threshold <= 2):
        if (a.houseNumber == '') and (b.houseNumber != ''):
            return 1
        if (a.houseNumber != '') and (b.houseNumber == ''):
            return -1

    # Otherwise fewer spelling errors first
    if a.threshold > b.threshold:
        return 1
    if a.threshold < b.threshold:
        return -1

    if (a.houseNumber == '') and (b.houseNumber != ''):
        return 1
    if (a.houseNumber != '') and (b.houseNumber == ''):
        return -1

    # An invalid hundred name means the wrong space was probably picked for the split,
    # so the other street names from that split are suspect too.
    # "BARUNGAüLake View HDüRoad" gives "BARUNGA View HD" (invalid) and "Lake Road"
    # or "BARUNGA HD" (valid) and "Lake View Road", which is the better choice.
    if a.split.hasInvalidHundredName and not b.split.hasInvalidHundredName:
        return 1
    if (not a.split.hasInvalidHundredName) and b.split.hasInvalidHundredName:
        return -1
    return 0


def formatAddress(houseNumber, streetName, suburbName, gazetteer):
    '''
Assemble "<house number> <street name>, <suburb>", using the canonical suburb when the suburb is known
    '''
    suburbName = cleanName(suburbName)
    if suburbName.startswith('HD '):
        suburbName = suburbName[3:]
    if suburbName.endswith(' HD'):
        suburbName = suburbName[:-3]
    if suburbName.endswith(' SA'):
        suburbName = suburbName[:-3]
    suburbName = gazetteer.canonicalSuburb(suburbName)
    separator = ', ' if ((houseNumber != '') or (streetName != '')) and (suburbName != '') else ''
    return oneSpace.sub(' ', f'{houseNumber} {streetName}{separator}{suburbName}'.strip()).upper()


def buildAddressCandidates(houseNumberTokens, suburbNameTokens, splits, gazetteer):
    '''
Construct every street address that each split implies
    '''
    addresses = []
    for split in splits:
        for index, houseNumber in enumerate(houseNumberTokens):
            streetSuffix = expandSuffixWords(split.group2[index], gazetteer)
            streetName = oneSpace.sub(' ', (split.group1[index] + ' ' + streetSuffix).strip())
            if streetName == '':
                continue

            # "BARUNGA HD" is a hundred name, not a street
            if streetName.endswith(' HD'):
                if closestMatch(streetName[:-3], gazetteer.hundredNames, 0) is None:
                    split.hasInvalidHundredName = True          # for example, "BARUNGA View HD"
                continue

            suburbName = suburbNameTokens[index] if index < len(suburbNameTokens) else ''
            streetMatch, threshold = tieredMatch(streetName, gazetteer.streetNames)
            if streetMatch is None:
                addresses.append(AddressCandidate(houseNumber, streetName, suburbName, UNMATCHED_THRESHOLD, split))
                continue
            if (suburbName.strip() == '') and (len(gazetteer.streetNames[streetMatch]) == 1):
                suburbName = gazetteer.streetNames[streetMatch][0]       # the only suburb with this street
            addresses.append(AddressCandidate(houseNumber, streetMatch, suburbName, threshold, split))
    return addresses


def parseMultiplexedAddress(houseNumber, streetName, suburbName, gazetteer):
    '''
Reconcile separate house number, street and suburb fields, any of which may hold several addresses.
Returns the best canonical address, or None if no address could be constructed.
    '''

    if MULTIPLEX_DELIMITER not in houseNumber:
        return formatAddress(houseNumber, streetName, suburbName, gazetteer)

    houseNumberTokens = houseNumber.split(MULTIPLEX_DELIMITER)
    suburbNameTokens = suburbName.split(MULTIPLEX_DELIMITER)
    splits = buildCandidateSplits(streetName, len(houseNumberTokens))
    addresses = buildAddressCandidates(houseNumberTokens, suburbNameTokens, splits, gazetteer)
    if len(addresses) == 0:
        logging.info('No street address could be constructed from "%s", "%s", "%s"', houseNumber, streetName, suburbName)
        return None

    addresses.sort(key=functools.cmp_to_key(addressComparer))
    for address in addresses:
        logging.debug('parseMultiplexedAddress - candidate (%s)', repr(address))
    best = addresses[0]
    return formatAddress(best.houseNumber, best.streetName, best.suburbName, gazetteer)


def canonicalAddress(address, gazetteer):
    '''
Reconcile a raw address of either kind. '' or None means the address could not be determined.
    '''
    if isinstance(address, FreeTextAddress):
        return parseFreeTextAddress(address.text, gazetteer)
    if isinstance(address, MultiplexedAddress):
        return parseMultiplexedAddress(address.houseNumber, address.streetName, address.suburbName, gazetteer)
    raise TypeError(f'Unknown address type ({type(address).__name__})')
