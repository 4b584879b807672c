# pylint: disable=line-too-long, invalid-name

'''
Bounding rectangle arithmetic for the positioned text elements read from a PDF page.

An element is a run of text with a bounding box (x, y, width, height) in page co-ordinates.
All elements on a page share the same origin (top left, as reported by pdfplumber).
'''

import collections


Rectangle = collections.namedtuple('Rectangle', ['x', 'y', 'width', 'height'])
Element = collections.namedtuple('Element', ['text', 'x', 'y', 'width', 'height'])

EMPTY_RECTANGLE = Rectangle(0, 0, 0, 0)


def intersect(rectangle1, rectangle2):
    '''
Construct the rectangle where the two rectangles overlap (the empty rectangle if they don't)
    '''
    x1 = max(rectangle1.x, rectangle2.x)
    y1 = max(rectangle1.y, rectangle2.y)
    x2 = min(rectangle1.x + rectangle1.width, rectangle2.x + rectangle2.width)
    y2 = min(rectangle1.y + rectangle1.height, rectangle2.y + rectangle2.height)
    if (x2 >= x1) and (y2 >= y1):
        return Rectangle(x1, y1, x2 - x1, y2 - y1)
    return EMPTY_RECTANGLE


def getArea(rectangle):
    return rectangle.width * rectangle.height


def overlapPercentage(element, rectangle):
    '''
The percentage of the element's area that lies within the rectangle.
For example, if a quarter of the element lies within the rectangle then this returns 25.
Elements with no area never overlap anything.
    '''
    elementArea = getArea(element)
    if elementArea == 0:
        return 0
    intersectionArea = getArea(intersect(rectangle, element))
    return (intersectionArea * 100) / elementArea
