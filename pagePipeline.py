# pylint: disable=line-too-long, invalid-name

'''
Turn the pages of a PDF register into development applications.

Each page is sorted (top to bottom, then left to right), parsed with the parser for its layout
and its address reconciled against the gazetteer. Pages that can't be parsed, and applications
whose address can't be reconciled, are logged and skipped.
An application number is only reported once - the first page it appears on wins.
'''

import datetime
import itertools
import logging
from applicationRecords import DevelopmentApplication
from applicationParser import isOldFormat, parseOldFormatApplication, parseNewFormatApplication
from addressNormalizer import canonicalAddress
from pdfElements import readPdfPages


MAXIMUM_PAGE_COUNT = 100        # Never read more pages than this from one document


def sortElements(elements):
    return sorted(elements, key=lambda element: (element.y, element.x))


def parseApplicationElements(elements, informationUrl):
    '''
Parse one page with the parser for its layout. Returns a RawApplication or None
    '''
    if isOldFormat(elements):
        return parseOldFormatApplication(elements, informationUrl)
    return parseNewFormatApplication(elements, informationUrl)


def buildDevelopmentApplication(rawApplication, gazetteer, commentUrl, scrapeDate):
    '''
Reconcile the address and build the record to store. Returns None if the address can't be determined
    '''
    address = canonicalAddress(rawApplication.address, gazetteer)
    if not address:
        logging.warning('Application number %s will be ignored because an address was not found or parsed (%s).',
                        rawApplication.applicationNumber, repr(rawApplication.address))
        return None
    receivedDate = '' if rawApplication.receivedDate is None else rawApplication.receivedDate.isoformat()
    return DevelopmentApplication(rawApplication.applicationNumber, address, rawApplication.description,
                                  rawApplication.informationUrl, commentUrl, scrapeDate.isoformat(), receivedDate)


def parseDocumentPages(pages, informationUrl, gazetteer, commentUrl, scrapeDate=None):
    '''
Parse an iterable of pages (each a list of Elements) into a list of DevelopmentApplications
    '''
    if scrapeDate is None:
        scrapeDate = datetime.date.today()
    developmentApplications = []
    applicationNumbers = set()
    for pageIndex, elements in enumerate(itertools.islice(pages, MAXIMUM_PAGE_COUNT)):
        logging.info('Reading and parsing applications from page %d of %s', pageIndex + 1, informationUrl)
        rawApplication = parseApplicationElements(sortElements(elements), informationUrl)
        if rawApplication is None:
            continue
        if rawApplication.applicationNumber in applicationNumbers:
            logging.info('Application number %s has already been read (ignored)', rawApplication.applicationNumber)
            continue
        developmentApplication = buildDevelopmentApplication(rawApplication, gazetteer, commentUrl, scrapeDate)
        if developmentApplication is None:
            continue
        applicationNumbers.add(rawApplication.applicationNumber)
        developmentApplications.append(developmentApplication)
    return developmentApplications


def parsePdf(buffer, informationUrl, gazetteer, commentUrl, scrapeDate=None):
    '''
Parse the development applications in a PDF register (the bytes of the PDF)
    '''
    with readPdfPages(buffer) as pages:
        return parseDocumentPages(pages, informationUrl, gazetteer, commentUrl, scrapeDate)
