"""Campus Catalog package.

University course/subject catalog stored as EAV (Entity-Attribute-Value)
tables in MySQL, organized by feature modules (eav, courses, subjects, ...)
with repository and service layers.
"""
