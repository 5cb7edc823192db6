# Re-export all models so callers can import from one place
from starwatch.models.satellite import TrackedObject as TrackedObject, SatelliteStatus as SatelliteStatus, HealthStatus as HealthStatus
from starwatch.models.mission import Mission as Mission, BoosterUse as BoosterUse, MissionLinks as MissionLinks
from starwatch.models.stats import ConstellationStats as ConstellationStats, MostFlownBooster as MostFlownBooster, FunFact as FunFact, FunFactIcon as FunFactIcon
from starwatch.models.live import LiveLaunchData as LiveLaunchData, NextLaunch as NextLaunch, PastLaunch as PastLaunch, WebcastLink as WebcastLink, LiveBooster as LiveBooster
