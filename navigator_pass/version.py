"""Navigator Pass Meta information.
   Navigator Pass gives typed access to pass-compatible password stores.
"""
__title__ = 'navigator_pass'
__description__ = (
   'Navigator Pass gives typed access to the entries and the '
   'encrypted content of pass-compatible password stores.'
)
__version__ = '0.4.0'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/phenobarbital/navigator-pass'
