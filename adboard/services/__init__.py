# Services package.
#
#   advertisement_service  — create / fetch-one / fetch-page for Advertisement
#
# Service functions take an AsyncSession as their first argument and open
# their own transaction on it, so each operation commits or rolls back as
# a unit regardless of what the router does afterwards.
