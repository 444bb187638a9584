"""
Classes to facilitate working with Google Sheets
"""

# can address up to 'ZZZ'
GoogleSheetsMaxColumns = 18278
