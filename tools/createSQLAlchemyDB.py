#!/usr/bin/env python

# pylint: disable=unspecified-encoding, broad-exception-caught, line-too-long, invalid-name, pointless-string-statement

'''
A python script to create the development application table and the gazetteer tables using SQLAlchemy definitions,
and, optionally, load the gazetteer files into the gazetteer tables.
The script imports the scraper's modules, so install the project first (pip install -e .).
SYNOPSIS
$ python createSQLAlchemyDB.py
                         [-C configDir|--configDir=configDir] [-c configFile|--configFile=configFile]
                         [-D databaseType|--databaseType=databaseType]
                         [-u username|--username=username] [-p password|--password=password]
                         [-s Server|--Server=Server] [-d databaseName|--databaseName=databaseName]
                         [-F dataFilesDirectory|--DataFilesDirectory=dataFilesDirectory]
                         [-v loggingLevel|--verbose=logingLevel] [-L logDir|--logDir=logDir] [-l logfile|--logfile=logfile]

REQUIRED


OPTIONS
-C configDir|--configDir=configDir
The directory where the configuration file can be found (default='.')

-c configFile|--configFile=configFile
The configuration file (default=scrapeApplications.json)

-D databaseType|--databaseType=databaseType
The type of database [eg:SQLite/MSSQL/MySQL] (default=SQLite)

-u userName|--userName=userName]
The user name require to access the database

-p password|--password=password]
The password require to access the database

-s server|--server=server]
The address of the database server

-d databaseName|--databaseName=databaseName]
The name of the database

-F dataFilesDirectory|--DataFilesDirectory=dataFilesDirectory
Load the gazetteer files in this directory into the (new) gazetteer tables

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
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy_utils import database_exists
import defineSQLAlchemyDB as dbConfig
import gazetteer as gz
from scrapeApplications import buildConnectionString

# This next section is plagurised from /usr/include/sysexits.h
EX_OK = 0        # successful termination
EX_WARN = 1        # non-fatal termination with warnings

EX_USAGE = 64        # command line usage error
EX_DATAERR = 65        # data format error
EX_NOINPUT = 66        # cannot open input
EX_UNAVAILABLE = 69    # service unavailable
EX_CONFIG = 78        # configuration error




# The main code
if __name__ == '__main__':
    '''
    Create the tables in a database
    '''

    # Get the script name (without the '.py' extension)
    progName = os.path.basename(sys.argv[0])
    progName = progName[0:-3]        # Strip off the .py ending

    # Define the command line options
    parser = argparse.ArgumentParser(prog=progName)
    parser.add_argument('-C', '--configDir', dest='configDir', default='.', help='The name of the configuration directory (default .)')
    parser.add_argument('-c', '--configFile', dest='configFile', default='scrapeApplications.json',
                        help='The name of the configuration file (default scrapeApplications.json)')
    parser.add_argument('-D', '--databaseType', dest='databaseType', choices=['SQLite', 'MSSQL', 'MySQL'], default='SQLite',
                        help='The database Type [e.g.: SQLite/MSSQL/MySQL]')
    parser.add_argument('-u', '--username', dest='username', help='The user required to access the database')
    parser.add_argument('-p', '--password', dest='password', help='The user password required to access the database')
    parser.add_argument('-s', '--server', dest='server', help='The address of the database server')
    parser.add_argument('-d', '--databaseName', dest='databaseName', help='The name of the database')
    parser.add_argument('-F', '--DataFilesDirectory', dest='DataDir', default=None, help='Load the gazetteer files from this directory')
    parser.add_argument('-v', '--verbose', dest='verbose', type=int, choices=list(range(0, 5)),
                        help='The level of logging\n\t0=CRITICAL,1=ERROR,2=WARNING,3=INFO,4=DEBUG')
    parser.add_argument('-L', '--logDir', dest='logDir', default='.', help='The name of a logging directory')
    parser.add_argument('-l', '--logFile', dest='logFile', default=None, help='The name of the logging file')
    parser.add_argument('args', nargs=argparse.REMAINDER)

    # Parse the command line options
    args = parser.parse_args()
    configDir = args.configDir
    configFile = args.configFile
    databaseType = args.databaseType
    username = args.username
    password = args.password
    server = args.server
    databaseName = args.databaseName
    DataDir = args.DataDir
    logDir = args.logDir
    logFile = args.logFile
    loggingLevel = args.verbose

    # Set up logging
    logging_levels = {0:logging.CRITICAL, 1:logging.ERROR, 2:logging.WARNING, 3:logging.INFO, 4:logging.DEBUG}
    logfmt = progName + ' [%(asctime)s]: %(message)s'
    if loggingLevel and (loggingLevel not in logging_levels) :
        sys.stderr.write(f'Error - invalid logging verbosity ({loggingLevel})\n')
        parser.print_usage(sys.stderr)
        sys.stderr.flush()
        sys.exit(EX_USAGE)
    if logFile :        # If sending to a file then check if the log directory exists
        if not os.path.isdir(logDir) :
            sys.stderr.write(f'Error - logDir ({logDir}) does not exits\n')
            parser.print_usage(sys.stderr)
            sys.stderr.flush()
            sys.exit(EX_USAGE)
        with open(os.path.join(logDir,logFile), 'w') as logfile :
            pass
        if loggingLevel :
            logging.basicConfig(format=logfmt, datefmt='%d/%m/%y %H:%M:%S %p', level=logging_levels[loggingLevel], filename=os.path.join(logDir, logFile))
        else :
            logging.basicConfig(format=logfmt, datefmt='%d/%m/%y %H:%M:%S %p', filename=os.path.join(logDir, logFile))
        print(f'Now logging to {os.path.join(logDir, logFile)}')
        sys.stdout.flush()
    else :
        if loggingLevel :
            logging.basicConfig(format=logfmt, datefmt='%d/%m/%y %H:%M:%S %p', level=logging_levels[loggingLevel])
        else :
            logging.basicConfig(format=logfmt, datefmt='%d/%m/%y %H:%M:%S %p')
        print('Now logging to sys.stderr')
        sys.stdout.flush()

    # Read in the configuration file - which must exist
    config = {}                 # The configuration data
    try:
        with open(os.path.join(configDir, configFile), 'rt', newline='') as configfile:
            config = json.load(configfile, object_pairs_hook=collections.OrderedDict)
    except (IOError, ValueError):
        logging.critical('configFile (%s) failed to load', os.path.join(configDir, configFile))
        logging.shutdown()
        sys.exit(EX_CONFIG)

    try:
        connectionString = buildConnectionString(config, databaseType, server, username, password, databaseName)
    except KeyError as e:
        logging.critical('Database configuration error - %s', e.args[0])
        logging.shutdown()
        sys.exit(EX_CONFIG)

    # Create the engine
    if databaseType == 'MSSQL':
        engine = create_engine(connectionString, use_setinputsizes=False)
    else:
        engine = create_engine(connectionString)

    # Check if the database exists (SQLite creates the database file)
    if (databaseType != 'SQLite') and not database_exists(engine.url):
        logging.critical('Database %s does not exist', databaseName)
        logging.shutdown()
        sys.exit(EX_CONFIG)

    # Connect to the database
    try:
        conn = engine.connect()
        conn.close()
    except OperationalError:
        logging.critical('Connection error for database %s', databaseName)
        logging.shutdown()
        sys.exit(EX_UNAVAILABLE)

    # Create all the tables
    try:
        dbConfig.Base.metadata.create_all(engine, dbConfig.Base.metadata.tables.values())
    except SQLAlchemyError as e:
        logging.critical('Failed to create the tables - %s', e)
        logging.shutdown()
        sys.exit(EX_UNAVAILABLE)
    print('All tables have been created')

    # Load the gazetteer
    if DataDir is not None:
        try:
            gazetteer = gz.loadGazetteer(DataDir,
                                         config.get('streetNamesFile', gz.STREET_NAMES_FILE),
                                         config.get('streetSuffixesFile', gz.STREET_SUFFIXES_FILE),
                                         config.get('suburbNamesFile', gz.SUBURB_NAMES_FILE),
                                         config.get('hundredNamesFile', gz.HUNDRED_NAMES_FILE))
        except OSError as e:
            logging.critical('Failed to read the gazetteer files - %s', e)
            logging.shutdown()
            sys.exit(EX_NOINPUT)
        try:
            gz.saveGazetteerToDatabase(gazetteer, engine)
        except SQLAlchemyError as e:
            logging.critical('Failed to load the gazetteer tables - %s', e)
            logging.shutdown()
            sys.exit(EX_DATAERR)
        print(f'Gazetteer loaded - {gazetteer!r}')
    sys.exit(EX_OK)
