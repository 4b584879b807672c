#!/usr/bin/env python

# pylint: disable=line-too-long, invalid-name, pointless-string-statement, broad-exception-caught

'''
A script to read the development applications registers (PDF files) published by the District Council of Streaky Bay,
reconcile the address of each development application against the street, suburb and hundred names of South Australia
and save the development applications in a database.

The registers are found by reading the development applications page, which links to one page per year.
The most recent register of the current year, and one register from a randomly chosen year, are read on each run.
Each page of a register describes one development application.

SYNOPSIS
$ python scrapeApplications.py [-C configDir|--configDir=configDir] [-c configFile|--configFile=configFile]
                         [-F dataFilesDirectory|--DataFilesDirectory=dataFilesDirectory] [-G|--gazetteerDatabase]
                         [-D DatabaseType|--DatabaseType=DatabaseType]
                         [-s server|--server=server]
                         [-u username|--username=username] [-p password|--password=password]
                         [-d databaseName|--databaseName=databaseName]
                         [-v loggingLevel|--verbose=logingLevel] [-L logDir|--logDir=logDir] [-l logfile|--logfile=logfile]

REQUIRED


OPTIONS
-C configDir|--configDir=configDir
The directory where the configuration files can be found (default='.')

-c configFile|--configFile=configFile
The configuration file (default=scrapeApplications.json)

-F dataFilesDirectory|--DataFilesDirectory=dataFilesDirectory
The directory containing the gazetteer files - streetnames.txt, streetsuffixes.txt, suburbnames.txt and hundrednames.txt (default='.')

-G|--gazetteerDatabase
Read the gazetteer from the STREET_NAME, STREET_SUFFIX, SUBURB_NAME and HUNDRED_NAME tables of the database

-D DatabaseType|--DatabaseType=DatabaseType
The type of database [choice:SQLite/MySQL/MSSQL] (default=SQLite)

-s server|--server=server]
The address of the database server

-u userName|--userName=userName]
The user name require to access the database

-p password|--userName=userName]
The user password require to access the database

-d databaseName|--databaseName=databaseName]
The name of the database (for SQLite, the name of the database file)

-v loggingLevel|--verbose=loggingLevel
Set the level of logging that you want (defaut WARNING).

-L logDir
The directory where the log file will be written (default='.')

-l logfile|--logfile=logfile
The name of a logging file where you want all messages captured (default=None)
'''

# Import all the modules that make life easy
import sys
import os
import argparse
import logging
import collections
import json
import random
import requests
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy_utils import database_exists
import gazetteer as gz
import webAccess
import applicationStore
import pagePipeline

# This next section is plagurised from /usr/include/sysexits.h
EX_OK = 0           # successful termination
EX_WARN = 1         # non-fatal termination with warnings

EX_USAGE = 64        # command line usage error
EX_DATAERR = 65      # data format error
EX_NOINPUT = 66      # cannot open input
EX_NOUSER = 67       # addressee unknown
EX_NOHOST = 68       # host name unknown
EX_UNAVAILABLE = 69  # service unavailable
EX_SOFTWARE = 70     # internal software error
EX_OSERR = 71        # system error (e.g., can't fork)
EX_OSFILE = 72       # critical OS file missing
EX_CANTCREAT = 73    # can't create (user) output file
EX_IOERR = 74        # input/output error
EX_TEMPFAIL = 75     # temp failure; user is invited to retry
EX_PROTOCOL = 76     # remote error in protocol
EX_NOPERM = 77       # permission denied
EX_CONFIG = 78       # configuration error


DEFAULT_APPLICATIONS_URL = 'https://www.streakybay.sa.gov.au/page.aspx?u=513'
DEFAULT_COMMENT_URL = 'mailto:dcstreaky@streakybay.sa.gov.au'
logging_levels = {0:logging.CRITICAL, 1:logging.ERROR, 2:logging.WARNING, 3:logging.INFO, 4:logging.DEBUG}


def selectPdfUrls(currentYearPdfUrls, randomYearPdfUrls):
    '''
The most recent (last) register of the current year and a random register from the random year
    '''
    selectedPdfUrls = []
    if len(currentYearPdfUrls) > 0:
        selectedPdfUrls.append(currentYearPdfUrls[-1])
    if len(randomYearPdfUrls) > 0:
        selectedPdfUrls.append(random.choice(randomYearPdfUrls))
    return selectedPdfUrls


def buildConnectionString(config, DatabaseType, server, username, password, databaseName):
    '''
Fill in the connectionString template for DatabaseType, with command line values overriding the configuration.
Raises KeyError, naming the missing item, if the configuration is incomplete.
    '''
    if DatabaseType not in config:
        raise KeyError(f'databaseType({DatabaseType}) not found in configuraton file')
    dbConfig = config[DatabaseType]
    if 'connectionString' not in dbConfig:
        raise KeyError(f'No {DatabaseType} connectionString defined in configuration file')
    params = {'server':server, 'username':username, 'password':password, 'databaseName':databaseName}
    for param, value in params.items():
        if (value is None) and (param in dbConfig):
            params[param] = dbConfig[param]
    connectionString = dbConfig['connectionString']
    for param, value in params.items():
        if ('{' + param + '}' in connectionString) and (value is None):
            raise KeyError(f'Missing definition for "{param}"')
    return connectionString.format(**params)


# The main code
if __name__ == '__main__':
    '''
    Read the registers, reconcile the addresses and save the development applications
    '''

    # Get the script name (without the '.py' extension)
    progName = os.path.basename(sys.argv[0])
    progName = progName[0:-3]        # Strip off the .py ending

    # Define the command line options
    parser = argparse.ArgumentParser(prog=progName)
    parser.add_argument('-C', '--configDir', dest='configDir', default='.',
                        help='The name of the configuration directory (default .)')
    parser.add_argument('-c', '--configFile', dest='configFile', default='scrapeApplications.json',
                        help='The name of the configuration file (default scrapeApplications.json)')
    parser.add_argument('-F', '--DataFilesDirectory', dest='DataDir', default='.',
                        help='The name of the directory containing the gazetteer files (default .)')
    parser.add_argument('-G', '--gazetteerDatabase', dest='gazetteerDatabase', action='store_true',
                        help='Read the gazetteer from the database')
    parser.add_argument('-D', '--DatabaseType', dest='DatabaseType', choices=['SQLite', 'MSSQL', 'MySQL'], default='SQLite',
                        help='The type of database [choice:SQLite/MSSQL/MySQL]')
    parser.add_argument('-s', '--server', dest='server', help='The address of the database server')
    parser.add_argument('-u', '--username', dest='username', help='The user required to access the database')
    parser.add_argument('-p', '--password', dest='password', help='The user password required to access the database')
    parser.add_argument('-d', '--databaseName', dest='databaseName', help='The name of the database')
    parser.add_argument('-v', '--verbose', dest='verbose', type=int, choices=list(range(0, 5)),
                        help='The level of logging\n\t0=CRITICAL,1=ERROR,2=WARNING,3=INFO,4=DEBUG')
    parser.add_argument('-L', '--logDir', dest='logDir', default='.', help='The name of a logging directory')
    parser.add_argument('-l', '--logFile', dest='logFile', default=None, help='The name of the logging file')
    parser.add_argument('args', nargs=argparse.REMAINDER)

    # Parse the command line options
    args = parser.parse_args()
    configDir = args.configDir
    configFile = args.configFile
    DataDir = args.DataDir
    gazetteerDatabase = args.gazetteerDatabase
    DatabaseType = args.DatabaseType
    server = args.server
    username = args.username
    password = args.password
    databaseName = args.databaseName
    logDir = args.logDir
    logFile = args.logFile
    loggingLevel = args.verbose

    # Set up logging
    logfmt = progName + ' [%(asctime)s]: %(message)s'
    if loggingLevel and (loggingLevel not in logging_levels):
        sys.stderr.write(f'Error - invalid logging verbosity ({loggingLevel})\n')
        parser.print_usage(sys.stderr)
        sys.stderr.flush()
        sys.exit(EX_USAGE)
    if logFile:        # If sending to a file then check if the log directory exists
        if not os.path.isdir(logDir):
            sys.stderr.write(f'Error - logDir ({logDir}) does not exits\n')
            parser.print_usage(sys.stderr)
            sys.stderr.flush()
            sys.exit(EX_USAGE)
        with open(os.path.join(logDir, logFile), 'wt', newline='', encoding='utf-8') as logfile:
            pass
        if loggingLevel:
            logging.basicConfig(format=logfmt, datefmt='%d/%m/%y %H:%M:%S %p', level=logging_levels[loggingLevel], filename=os.path.join(logDir, logFile))
        else:
            logging.basicConfig(format=logfmt, datefmt='%d/%m/%y %H:%M:%S %p', filename=os.path.join(logDir, logFile))
        print(f'Now logging to {os.path.join(logDir, logFile)}')
        sys.stdout.flush()
    else:
        if loggingLevel:
            logging.basicConfig(format=logfmt, datefmt='%d/%m/%y %H:%M:%S %p', level=logging_levels[loggingLevel])
        else:
            logging.basicConfig(format=logfmt, datefmt='%d/%m/%y %H:%M:%S %p')
        print('Now logging to sys.stderr')
        sys.stdout.flush()

    # Read in the configuration file - which must exist
    config = {}                 # The configuration data
    try:
        with open(os.path.join(configDir, configFile), 'rt', newline='', encoding='utf-8') as configfile:
            config = json.load(configfile, object_pairs_hook=collections.OrderedDict)
    except (IOError, ValueError):
        logging.critical('configFile (%s) failed to load', os.path.join(configDir, configFile))
        logging.shutdown()
        sys.exit(EX_CONFIG)
    developmentApplicationsUrl = config.get('DevelopmentApplicationsUrl', DEFAULT_APPLICATIONS_URL)
    commentUrl = config.get('CommentUrl', DEFAULT_COMMENT_URL)
    linkSelector = config.get('linkSelector', webAccess.LINK_SELECTOR)

    # Connect to the database
    try:
        connectionString = buildConnectionString(config, DatabaseType, server, username, password, databaseName)
    except KeyError as e:
        logging.critical('Database configuration error - %s', e.args[0])
        logging.shutdown()
        sys.exit(EX_CONFIG)
    try:
        # SQLite creates the database file, other databases must already exist
        if (DatabaseType != 'SQLite') and not database_exists(connectionString):
            logging.critical('Database %s does not exist', databaseName or config[DatabaseType].get('databaseName'))
            logging.shutdown()
            sys.exit(EX_CONFIG)
        if DatabaseType == 'MSSQL':
            engine = applicationStore.initializeDatabase(connectionString, use_setinputsizes=False)
        else:
            engine = applicationStore.initializeDatabase(connectionString)
    except OperationalError:
        logging.critical('Connection error for database (%s)', DatabaseType)
        logging.shutdown()
        sys.exit(EX_UNAVAILABLE)

    # Read the gazetteer
    try:
        if gazetteerDatabase:
            gazetteer = gz.loadGazetteerFromDatabase(engine)
        else:
            gazetteer = gz.loadGazetteer(DataDir,
                                         config.get('streetNamesFile', gz.STREET_NAMES_FILE),
                                         config.get('streetSuffixesFile', gz.STREET_SUFFIXES_FILE),
                                         config.get('suburbNamesFile', gz.SUBURB_NAMES_FILE),
                                         config.get('hundredNamesFile', gz.HUNDRED_NAMES_FILE))
    except (OSError, SQLAlchemyError) as e:
        logging.critical('Failed to read the gazetteer - %s', e)
        logging.shutdown()
        sys.exit(EX_NOINPUT)
    logging.info('Loaded %s', repr(gazetteer))

    # Read the main page that has links to each year of development applications
    session = webAccess.createSession()
    try:
        body = webAccess.fetchUrl(session, developmentApplicationsUrl)
    except requests.RequestException as e:
        logging.critical('Failed to retrieve %s - %s', developmentApplicationsUrl, e)
        logging.shutdown()
        sys.exit(EX_UNAVAILABLE)
    webAccess.politeSleep()
    yearPageUrls = webAccess.findYearPageUrls(body, developmentApplicationsUrl, linkSelector)
    if len(yearPageUrls) == 0:
        logging.warning('No PDF files were found to examine.')
        logging.shutdown()
        sys.exit(EX_OK)

    # Select the current year and randomly select one other year (which can be the current year)
    currentYearPageUrl = yearPageUrls[0]
    randomYearPageUrl = random.choice(yearPageUrls)
    yearPdfUrls = []
    for yearPageUrl in (currentYearPageUrl, randomYearPageUrl):
        try:
            body = webAccess.fetchUrl(session, yearPageUrl)
        except requests.RequestException as e:
            logging.error('Failed to retrieve %s - %s', yearPageUrl, e)
            yearPdfUrls.append([])
            continue
        webAccess.politeSleep()
        yearPdfUrls.append(webAccess.findPdfUrls(body, yearPageUrl, linkSelector))
    selectedPdfUrls = selectPdfUrls(yearPdfUrls[0], yearPdfUrls[1])
    if len(selectedPdfUrls) == 0:
        logging.warning('No PDF files were selected to be examined.')
        logging.shutdown()
        sys.exit(EX_OK)

    # Parse the selected PDFs one at a time
    exitCode = EX_OK
    for pdfUrl in selectedPdfUrls:
        logging.info('Parsing document: %s', pdfUrl)
        try:
            buffer = webAccess.fetchUrl(session, pdfUrl)
        except requests.RequestException as e:
            logging.error('Failed to retrieve %s - %s', pdfUrl, e)
            exitCode = EX_WARN
            continue
        webAccess.politeSleep()
        try:
            developmentApplications = pagePipeline.parsePdf(buffer, pdfUrl, gazetteer, commentUrl)
        except Exception as e:
            logging.error('Failed to parse %s - %s', pdfUrl, e)
            exitCode = EX_WARN
            continue
        logging.info('Parsed %d development application(s) from document: %s', len(developmentApplications), pdfUrl)

        logging.info('Inserting development applications into the database.')
        for developmentApplication in developmentApplications:
            try:
                applicationStore.insertRow(engine, developmentApplication)
            except SQLAlchemyError as e:
                logging.error('Failed to save application %s - %s', developmentApplication.applicationNumber, e)
                exitCode = EX_WARN

    logging.info('Complete.')
    logging.shutdown()
    sys.exit(exitCode)
