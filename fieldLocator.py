# pylint: disable=line-too-long, invalid-name

'''
Find the value of a labelled field on a PDF page.

A page is a flat list of positioned text elements. A field is found by looking for its heading
(for example "Property Address:") and then collecting every element that lies, at least in part,
in a rectangle next to (or below) that heading. The rectangle is bounded by the next heading
when there is one, otherwise by a multiple of the heading's own size.

The elements must already be sorted by y and then x, so the text reads naturally.
'''

import sys
import re
from geometry import Rectangle, overlapPercentage


OVERLAP_THRESHOLD = 10              # An element is in a field if more than this percentage of it is inside the field's bounds
FALLBACK_WIDTH_MULTIPLIER = 3       # Field width, as a multiple of heading width, when there is no heading to the right
FALLBACK_HEIGHT_MULTIPLIER = 2      # Field height, as a multiple of heading height, when a field below a heading has no heading beneath it
UNBOUNDED = sys.float_info.max

whiteSpace = re.compile(r'\s')
oneSpace = re.compile(r'\s\s+')


def normalizeHeading(thisText):
    return whiteSpace.sub('', thisText.lower())


def findHeading(elements, heading):
    '''
The first element whose text is the heading (ignoring case and white space), or None
    '''
    for element in elements:
        if normalizeHeading(element.text) == heading:
            return element
    return None


def findHeadingStartingWith(elements, prefix):
    for element in elements:
        if normalizeHeading(element.text).startswith(prefix):
            return element
    return None


def boundsRightOf(heading, rightHeading=None, lowerHeading=None, unboundedWidth=False, unboundedHeight=False):
    '''
The bounds of a field that starts at the right hand edge of its heading.
The field stops at the left hand edge of rightHeading and at the top of lowerHeading (if supplied).
Without a rightHeading the field is FALLBACK_WIDTH_MULTIPLIER times the width of the heading (or unbounded)
Without a lowerHeading the field is the height of the heading (or unbounded)
    '''
    if rightHeading is not None:
        width = rightHeading.x - heading.x - heading.width
    elif unboundedWidth:
        width = UNBOUNDED
    else:
        width = heading.width * FALLBACK_WIDTH_MULTIPLIER
    if lowerHeading is not None:
        height = lowerHeading.y - heading.y
    elif unboundedHeight:
        height = UNBOUNDED
    else:
        height = heading.height
    return Rectangle(heading.x + heading.width, heading.y, max(width, 0), max(height, 0))


def boundsBelow(heading, lowerHeading=None):
    '''
The bounds of a field that sits beneath, and to the right of, its heading, running down to lowerHeading
    '''
    top = heading.y + heading.height
    if lowerHeading is not None:
        height = lowerHeading.y - top
    else:
        height = heading.height * FALLBACK_HEIGHT_MULTIPLIER
    return Rectangle(heading.x + heading.width, top, UNBOUNDED, max(height, 0))


def findElements(elements, bounds):
    return [element for element in elements if overlapPercentage(element, bounds) > OVERLAP_THRESHOLD]


def findFirstElement(elements, bounds):
    for element in elements:
        if overlapPercentage(element, bounds) > OVERLAP_THRESHOLD:
            return element
    return None


def joinElementText(elements):
    return oneSpace.sub(' ', ' '.join(element.text for element in elements).strip())


def locateField(elements, heading, boundsPolicy):
    '''
Find heading, work out the bounds of its value with boundsPolicy(headingElement)
and return the text of every element in those bounds.
Returns None if the heading is missing and '' if the heading has no value.
    '''
    headingElement = findHeading(elements, heading)
    if headingElement is None:
        return None
    return joinElementText(findElements(elements, boundsPolicy(headingElement)))


def summarizeElements(elements):
    '''
All the text on the page, for logging pages that could not be parsed
    '''
    return ''.join(f'[{element.text}]' for element in elements)
