# pylint: disable=line-too-long, invalid-name

'''
Read one development application from the elements of one PDF page.

Two register layouts are in use:
    old format - the page has an "Application Fees:" heading, and the address is a single line of text
    new format - the application number is part of a "Development ..." heading, and the address
                 is in separate house number, street and suburb fields below "Assessment Number"

A page that doesn't have an application number or an address is skipped (None is returned).
Skipped pages are logged, with all their text, so that new layouts can be diagnosed.
'''

import re
import datetime
import logging
from applicationRecords import FreeTextAddress, MultiplexedAddress, RawApplication, MULTIPLEX_DELIMITER, NO_DESCRIPTION
from fieldLocator import findHeading, findHeadingStartingWith, boundsRightOf, boundsBelow, findElements, findFirstElement, locateField, summarizeElements


# Old format headings
APPLICATION_NUMBER_HEADING = 'applicationnumber:'
APPLICATION_FEES_HEADING = 'applicationfees:'
APPLICATION_DATE_HEADING = 'applicationdate:'
DEVELOPMENT_COMPLETED_HEADING = 'developmentcompleted:'
PROPERTY_ADDRESS_HEADING = 'propertyaddress:'
DEVELOPMENT_DESCRIPTION_HEADING = 'developmentdescription:'
RELEVANT_AUTHORITY_HEADING = 'relevantauthority:'

# New format headings
DEVELOPMENT_HEADING_PREFIX = 'development'
NEW_APPLICATION_DATE_HEADING = 'applicationdate'
ASSESSMENT_NUMBER_HEADING = 'assessmentnumber'
NEW_DEVELOPMENT_DESCRIPTION_HEADING = 'developmentdescription'

whiteSpace = re.compile(r'\s')
oneSpace = re.compile(r'\s\s+')
receivedDatePattern = re.compile(r'^(\d{1,2})/(\d{1,2})/(\d{4})$')       # D/M/YYYY - the leading zero of the day or month may be missing
houseNumberPattern = re.compile(r'^[0-9A-Z/\-' + MULTIPLEX_DELIMITER + r']+$', re.IGNORECASE)
houseNumberMarker = re.compile(r'[0-9' + MULTIPLEX_DELIMITER + r']', re.IGNORECASE)


def isOldFormat(elements):
    return findHeading(elements, APPLICATION_FEES_HEADING) is not None


def parseReceivedDate(thisText):
    '''
Parse a D/M/YYYY date. Anything else (including an impossible date) is None
    '''
    if thisText is None:
        return None
    match = receivedDatePattern.match(thisText.strip())
    if match is None:
        return None
    try:
        return datetime.date(int(match.group(3)), int(match.group(2)), int(match.group(1)))
    except ValueError:
        return None


def looksLikeHouseNumber(thisText):
    thisText = thisText.strip()
    return (houseNumberPattern.match(thisText) is not None) and (houseNumberMarker.search(thisText) is not None)


def splitAddressFields(texts):
    '''
Assign the address elements of a new format page to house number, street and suburb.
The fields are laid out left to right; an empty field has no element at all.
    '''
    texts = [oneSpace.sub(' ', thisText).strip() for thisText in texts]
    texts = [thisText for thisText in texts if thisText != '']
    if len(texts) == 0:
        return None
    if len(texts) == 1:
        return MultiplexedAddress('', texts[0], '')
    if len(texts) == 2:
        if looksLikeHouseNumber(texts[0]):
            return MultiplexedAddress(texts[0], texts[1], '')
        return MultiplexedAddress('', texts[0], texts[1])
    return MultiplexedAddress(texts[0], ' '.join(texts[1:-1]), texts[-1])


def parseOldFormatApplication(elements, informationUrl):
    '''
Parse a page with "Application Number:", "Application Fees:", "Property Address:" ... headings
    '''

    applicationHeading = findHeading(elements, APPLICATION_NUMBER_HEADING)
    applicationFeesHeading = findHeading(elements, APPLICATION_FEES_HEADING)
    applicationDateHeading = findHeading(elements, APPLICATION_DATE_HEADING)
    developmentCompletedHeading = findHeading(elements, DEVELOPMENT_COMPLETED_HEADING)
    relevantAuthorityHeading = findHeading(elements, RELEVANT_AUTHORITY_HEADING)

    # The application number
    if applicationHeading is None:
        logging.info('Ignoring the page because the "Application Number" heading is missing.  Elements: %s', summarizeElements(elements))
        return None
    applicationNumberElement = findFirstElement(elements, boundsRightOf(applicationHeading, applicationFeesHeading))
    applicationNumber = '' if applicationNumberElement is None else whiteSpace.sub('', applicationNumberElement.text)
    if applicationNumber == '':
        logging.info('Ignoring the page because the development application number text is missing.  Elements: %s', summarizeElements(elements))
        return None
    logging.info('    Found "%s".', applicationNumber)

    # The received date
    receivedDate = None
    if applicationDateHeading is not None:
        receivedDateElement = findFirstElement(elements, boundsRightOf(applicationDateHeading, developmentCompletedHeading))
        if receivedDateElement is not None:
            receivedDate = parseReceivedDate(receivedDateElement.text)

    # The address
    address = locateField(elements, PROPERTY_ADDRESS_HEADING, lambda heading: boundsRightOf(heading, applicationFeesHeading))
    if address is None:
        logging.info('Ignoring the page because the "Property Address" heading is missing.  Elements: %s', summarizeElements(elements))
        return None
    if address == '':
        logging.info('Could not find an address for the current development application %s.  The development application will be ignored.  Elements: %s',
                     applicationNumber, summarizeElements(elements))
        return None

    # The description (which can run over several lines, down to the "Relevant Authority:" heading)
    description = locateField(elements, DEVELOPMENT_DESCRIPTION_HEADING,
                              lambda heading: boundsRightOf(heading, applicationFeesHeading, relevantAuthorityHeading, unboundedHeight=True))

    return RawApplication(applicationNumber, FreeTextAddress(address), description or NO_DESCRIPTION, informationUrl, receivedDate)


def parseNewFormatApplication(elements, informationUrl):
    '''
Parse a page with "Development <number>", "Application Date", "Assessment Number" ... headings
    '''

    applicationHeading = findHeadingStartingWith(elements, DEVELOPMENT_HEADING_PREFIX)
    applicationDateHeading = findHeading(elements, NEW_APPLICATION_DATE_HEADING)
    assessmentNumberHeading = findHeading(elements, ASSESSMENT_NUMBER_HEADING)
    developmentDescriptionHeading = findHeading(elements, NEW_DEVELOPMENT_DESCRIPTION_HEADING)

    # The application number is normally the second word of the heading, otherwise it follows the heading
    if applicationHeading is None:
        logging.info('Ignoring the page because the "Development" heading is missing.  Elements: %s', summarizeElements(elements))
        return None
    tokens = oneSpace.sub(' ', applicationHeading.text.strip()).split(' ')
    if len(tokens) >= 2:
        applicationNumber = tokens[1]
    else:
        applicationNumberElement = findFirstElement(elements, boundsRightOf(applicationHeading, applicationDateHeading))
        applicationNumber = '' if applicationNumberElement is None else whiteSpace.sub('', applicationNumberElement.text)
    if applicationNumber == '':
        logging.info('Ignoring the page because the development application number text is missing.  Elements: %s', summarizeElements(elements))
        return None
    logging.info('    Found "%s".', applicationNumber)

    # The received date
    receivedDate = None
    if applicationDateHeading is not None:
        receivedDateElement = findFirstElement(elements, boundsRightOf(applicationDateHeading, unboundedWidth=True))
        if receivedDateElement is not None:
            receivedDate = parseReceivedDate(receivedDateElement.text)

    # The address (house number, street and suburb) sits below the "Assessment Number" heading
    if assessmentNumberHeading is None:
        logging.info('Ignoring the page because the "Assessment Number" heading is missing.  Elements: %s', summarizeElements(elements))
        return None
    addressElements = findElements(elements, boundsBelow(assessmentNumberHeading, developmentDescriptionHeading))
    address = splitAddressFields([element.text for element in addressElements])
    if address is None:
        logging.info('Could not find an address for the current development application %s.  The development application will be ignored.  Elements: %s',
                     applicationNumber, summarizeElements(elements))
        return None

    # The description
    description = locateField(elements, NEW_DEVELOPMENT_DESCRIPTION_HEADING, lambda heading: boundsRightOf(heading, unboundedWidth=True))

    return RawApplication(applicationNumber, address, description or NO_DESCRIPTION, informationUrl, receivedDate)
