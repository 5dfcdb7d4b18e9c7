# -*- coding: utf-8 -*-
"""
__init__

Example blog administered through the admin module.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
