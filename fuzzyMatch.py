# pylint: disable=line-too-long, invalid-name

'''
Approximate (edit distance) matching of text against a list of known names.

Matching is case insensitive and ignores leading, trailing and repeated white space.
The known name is returned exactly as it appears in the candidate list.
When several candidates are equally close the first one (in the candidate iteration order) wins,
so callers must pass candidates in a stable order (the gazetteer keeps file order).
'''

import re
import jellyfish


oneSpace = re.compile(r'\s\s+')

FUZZ_LEVELS = (0, 1, 2)         # The edit distance tiers, most exact first


def cleanMatchText(thisText):
    '''
Fold text for comparison - lower case, trimmed, single spaced
    '''
    if thisText is None:
        return ''
    return oneSpace.sub(' ', str(thisText).strip()).lower()


def closestMatch(query, candidates, threshold):
    '''
Return the candidate closest to query, provided it is within threshold edits, else None
    '''
    thisQuery = cleanMatchText(query)
    if thisQuery == '':
        return None
    bestMatch = None
    bestDist = None
    for candidate in candidates:
        thisCandidate = cleanMatchText(candidate)
        # The length difference is a lower bound for the edit distance
        if abs(len(thisCandidate) - len(thisQuery)) > threshold:
            continue
        dist = jellyfish.levenshtein_distance(thisQuery, thisCandidate)
        if dist > threshold:
            continue
        if (bestDist is None) or (dist < bestDist):
            bestMatch = candidate
            bestDist = dist
            if dist == 0:
                break
    return bestMatch


def tieredMatch(query, candidates, fuzzLevels=FUZZ_LEVELS):
    '''
Try each fuzz level in turn and return (match, fuzzLevel) for the first level that matches
Return (None, None) if nothing matches at any level
    '''
    for fuzzLevel in fuzzLevels:
        thisMatch = closestMatch(query, candidates, fuzzLevel)
        if thisMatch is not None:
            return thisMatch, fuzzLevel
    return None, None
