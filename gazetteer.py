# pylint: disable=line-too-long, invalid-name

'''
The gazetteer - the reference lists used to reconcile addresses.

    streetNames     - street name and the suburbs that have a street of that name
    streetSuffixes  - street suffix abbreviation (TCE) and the full word (TERRACE)
    suburbNames     - suburb name and the canonical suburb (STREAKY BAY SA 5680)
    hundredNames    - hundred name and the suburbs associated with that hundred

The gazetteer is built once, before any page is parsed, and never changes after that.
It can be read from four text files or from four database tables.
All names are upper case with single spaces. The order of the source data is kept,
as fuzzy matching breaks ties by picking the first candidate.
'''

import os
import csv
import re
import logging
from types import MappingProxyType
import pandas as pd
from sqlalchemy import text


oneSpace = re.compile(r'\s\s+')

STREET_NAMES_FILE = 'streetnames.txt'
STREET_SUFFIXES_FILE = 'streetsuffixes.txt'
SUBURB_NAMES_FILE = 'suburbnames.txt'
HUNDRED_NAMES_FILE = 'hundrednames.txt'


def cleanName(thisText):
    '''
Upper case, trimmed, single spaced
    '''
    if thisText is None:
        return ''
    return oneSpace.sub(' ', str(thisText).upper()).strip()


class Gazetteer:
    '''
Read only street, street suffix, suburb and hundred lookups
    '''

    def __init__(self, streetNames, streetSuffixes, suburbNames, hundredNames):
        self.streetNames = MappingProxyType({street: tuple(suburbs) for street, suburbs in streetNames.items()})
        self.streetSuffixes = MappingProxyType(dict(streetSuffixes))
        self.suburbNames = MappingProxyType(dict(suburbNames))
        self.hundredNames = MappingProxyType({hundred: tuple(suburbs) for hundred, suburbs in hundredNames.items()})
        self.suffixWords = frozenset(self.streetSuffixes.values())

    def __repr__(self):
        return f'Gazetteer({len(self.streetNames)} streets, {len(self.streetSuffixes)} suffixes, {len(self.suburbNames)} suburbs, {len(self.hundredNames)} hundreds)'

    def canonicalSuburb(self, suburbName):
        '''
The canonical form of a suburb name, or the name itself if it isn't a known suburb
        '''
        suburbName = cleanName(suburbName)
        return self.suburbNames.get(suburbName, suburbName)

    def expandSuffix(self, word):
        '''
Expand a street suffix abbreviation (TCE to TERRACE), otherwise return the word unchanged
        '''
        return self.streetSuffixes.get(cleanName(word), word)


def readLines(fileName):
    '''
Read the non blank lines of a comma separated reference file as lists of fields
    '''
    with open(fileName, 'rt', newline='', encoding='utf-8') as refFile:
        refReader = csv.reader(refFile, dialect=csv.excel)
        for row in refReader:
            if all(cleanName(field) == '' for field in row):
                continue
            yield row


def addStreetName(streetNames, streetName, suburbName):
    streetName = cleanName(streetName)
    suburbName = cleanName(suburbName)
    if streetName == '':
        return
    if streetName not in streetNames:
        streetNames[streetName] = []
    if (suburbName != '') and (suburbName not in streetNames[streetName]):
        streetNames[streetName].append(suburbName)      # several suburbs can have a street of the same name


def splitSuburbs(suburbList):
    '''
Split a semicolon separated list of suburbs
    '''
    suburbs = []
    if suburbList is None:
        return suburbs
    for suburb in str(suburbList).split(';'):
        suburb = cleanName(suburb)
        if (suburb != '') and (suburb not in suburbs):
            suburbs.append(suburb)
    return suburbs


def loadGazetteer(dataDir, streetNamesFile=STREET_NAMES_FILE, streetSuffixesFile=STREET_SUFFIXES_FILE,
                  suburbNamesFile=SUBURB_NAMES_FILE, hundredNamesFile=HUNDRED_NAMES_FILE):
    '''
Read the four reference files from dataDir.
Any file that cannot be read raises OSError - there is no point going on without the reference data.
    '''

    logging.info('Reading street names')
    streetNames = {}
    for row in readLines(os.path.join(dataDir, streetNamesFile)):
        addStreetName(streetNames, row[0], row[1] if len(row) > 1 else '')
    logging.info('%d street names read', len(streetNames))

    logging.info('Reading street suffixes')
    streetSuffixes = {}
    for row in readLines(os.path.join(dataDir, streetSuffixesFile)):
        if len(row) < 2:
            logging.warning('Street suffix (%s) has no expansion - ignored', row[0])
            continue
        streetSuffixes[cleanName(row[0])] = cleanName(row[1])
    logging.info('%d street suffixes read', len(streetSuffixes))

    logging.info('Reading suburb names')
    suburbNames = {}
    for row in readLines(os.path.join(dataDir, suburbNamesFile)):
        suburbKey = cleanName(row[0])
        if len(row) > 1:
            suburbNames[suburbKey] = cleanName(row[1])
        else:
            suburbNames[suburbKey] = suburbKey
    logging.info('%d suburb names read', len(suburbNames))

    # HUNDRED,SUBURB;SUBURB or just HUNDRED
    logging.info('Reading hundred names')
    hundredNames = {}
    for row in readLines(os.path.join(dataDir, hundredNamesFile)):
        hundredNames[cleanName(row[0])] = splitSuburbs(row[1] if len(row) > 1 else None)
    logging.info('%d hundred names read', len(hundredNames))

    return Gazetteer(streetNames, streetSuffixes, suburbNames, hundredNames)


def loadGazetteerFromDatabase(engine):
    '''
Read the four reference tables using the database engine
    '''

    with engine.connect() as conn:
        logging.info('Fetching street names')
        dfStreets = pd.read_sql_query(text('SELECT street_name, suburb_name FROM STREET_NAME ORDER BY street_name_pid'), conn)
        streetNames = {}
        for (streetName, suburbName) in dfStreets.values.tolist():
            addStreetName(streetNames, streetName, suburbName)

        logging.info('Fetching street suffixes')
        dfSuffixes = pd.read_sql_query(text('SELECT abbreviation, suffix FROM STREET_SUFFIX ORDER BY street_suffix_pid'), conn)
        streetSuffixes = {}
        for (abbreviation, suffix) in dfSuffixes.values.tolist():
            streetSuffixes[cleanName(abbreviation)] = cleanName(suffix)

        logging.info('Fetching suburb names')
        dfSuburbs = pd.read_sql_query(text('SELECT suburb_key, suburb_name FROM SUBURB_NAME ORDER BY suburb_name_pid'), conn)
        suburbNames = {}
        for (suburbKey, suburbName) in dfSuburbs.values.tolist():
            suburbNames[cleanName(suburbKey)] = cleanName(suburbName)

        logging.info('Fetching hundred names')
        dfHundreds = pd.read_sql_query(text('SELECT hundred_name, suburb_names FROM HUNDRED_NAME ORDER BY hundred_name_pid'), conn)
        hundredNames = {}
        for (hundredName, suburbList) in dfHundreds.values.tolist():
            hundredNames[cleanName(hundredName)] = splitSuburbs(suburbList)

    logging.info('%d streets, %d suffixes, %d suburbs and %d hundreds fetched',
                 len(streetNames), len(streetSuffixes), len(suburbNames), len(hundredNames))
    return Gazetteer(streetNames, streetSuffixes, suburbNames, hundredNames)


def saveGazetteerToDatabase(gazetteer, engine):
    '''
Append the gazetteer to the (existing, empty) reference tables.
Rows are appended in gazetteer order, so the autoincrement _pid columns keep that order for loadGazetteerFromDatabase()
    '''

    streetRows = [(streetName, suburbName) for streetName, suburbs in gazetteer.streetNames.items() for suburbName in (suburbs or ('',))]
    dfStreets = pd.DataFrame(streetRows, columns=['street_name', 'suburb_name'])
    dfSuffixes = pd.DataFrame(list(gazetteer.streetSuffixes.items()), columns=['abbreviation', 'suffix'])
    dfSuburbs = pd.DataFrame(list(gazetteer.suburbNames.items()), columns=['suburb_key', 'suburb_name'])
    dfHundreds = pd.DataFrame([(hundredName, ';'.join(suburbs)) for hundredName, suburbs in gazetteer.hundredNames.items()],
                              columns=['hundred_name', 'suburb_names'])
    with engine.begin() as conn:
        dfStreets.to_sql('STREET_NAME', conn, if_exists='append', index=False)
        dfSuffixes.to_sql('STREET_SUFFIX', conn, if_exists='append', index=False)
        dfSuburbs.to_sql('SUBURB_NAME', conn, if_exists='append', index=False)
        dfHundreds.to_sql('HUNDRED_NAME', conn, if_exists='append', index=False)
    logging.info('Saved %s', repr(gazetteer))
