"""
Unit tests for the rectangle arithmetic.
"""

from geometry import Rectangle, Element, EMPTY_RECTANGLE, intersect, getArea, overlapPercentage


class TestIntersect:
    def test_overlapping(self):
        assert intersect(Rectangle(0, 0, 10, 10), Rectangle(5, 5, 10, 10)) == Rectangle(5, 5, 5, 5)

    def test_disjoint(self):
        assert intersect(Rectangle(0, 0, 10, 10), Rectangle(20, 20, 5, 5)) == EMPTY_RECTANGLE

    def test_touching_edges_has_no_area(self):
        touching = intersect(Rectangle(0, 0, 10, 10), Rectangle(10, 0, 10, 10))
        assert getArea(touching) == 0

    def test_contained(self):
        assert intersect(Rectangle(0, 0, 100, 100), Rectangle(10, 10, 5, 5)) == Rectangle(10, 10, 5, 5)


class TestOverlapPercentage:
    def test_zero_area_element(self):
        assert overlapPercentage(Element("", 5, 5, 0, 10), Rectangle(0, 0, 100, 100)) == 0
        assert overlapPercentage(Element("x", 5, 5, 10, 0), Rectangle(0, 0, 100, 100)) == 0

    def test_fully_inside(self):
        assert overlapPercentage(Element("x", 10, 10, 20, 5), Rectangle(0, 0, 100, 100)) == 100

    def test_quarter_inside(self):
        assert overlapPercentage(Element("x", 0, 0, 10, 10), Rectangle(5, 5, 100, 100)) == 25

    def test_outside(self):
        assert overlapPercentage(Element("x", 200, 200, 10, 10), Rectangle(0, 0, 100, 100)) == 0
