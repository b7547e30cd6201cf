# coolblocks/visualization.py
"""
Map and chart utilities for CoolBlocks
Risk-tinted location map, greenspace overlay and plan impact charts
"""

import folium
import geopandas as gpd
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import branca.colormap as cmap
from shapely.geometry import Polygon
from typing import Iterable, Optional

from coolblocks import config
from coolblocks.greenspace import geodesic_area_km2
from coolblocks.models import GreenspacePolygon, LookupOutcome, RiskLevel
from coolblocks.risk import RISK_COLORS, RISK_THRESHOLDS, risk_color


def format_number(value: Optional[float], digits: int = 1) -> str:
    """Thousands separators, at most `digits` decimals, trailing zeros dropped"""
    if value is None:
        return 'n/a'
    text = f"{float(value):,.{digits}f}"
    if digits > 0:
        text = text.rstrip('0').rstrip('.')
    return text


class HeatRiskMapVisualizer:
    """
    Interactive map for one lookup outcome
    """

    def __init__(self, zoom_start: int = None, tiles: str = None):
        """
        Initialize map visualizer

        Args:
            zoom_start: Initial zoom level
            tiles: Map tiles to use
        """
        self.zoom_start = zoom_start or config.MAP_ZOOM
        self.tiles = tiles or config.MAP_TILES

    def create_base_map(self, latitude: float, longitude: float) -> folium.Map:
        return folium.Map(
            location=[latitude, longitude],
            zoom_start=self.zoom_start,
            tiles=self.tiles,
            scrollWheelZoom=False,
            control_scale=True,
        )

    def add_risk_marker(self, map_obj: folium.Map, latitude: float, longitude: float, score: int) -> folium.Map:
        """Circle marker tinted by risk tier"""
        color = risk_color(score)
        folium.CircleMarker(
            location=[latitude, longitude],
            radius=14,
            color=color,
            fill=True,
            fill_color=color,
            fill_opacity=0.35,
            tooltip=f"Heat risk: {score}",
        ).add_to(map_obj)
        return map_obj

    def add_reference_circle(self, map_obj: folium.Map, circle: Polygon) -> folium.Map:
        folium.GeoJson(
            circle.__geo_interface__,
            name='Greenspace search area',
            style_function=lambda x: {
                'fillColor': 'transparent',
                'color': '#64748b',
                'weight': 1,
                'dashArray': '4 4',
                'fillOpacity': 0,
            },
        ).add_to(map_obj)
        return map_obj

    def add_greenspace_layer(
        self,
        map_obj: folium.Map,
        polygons: Iterable[GreenspacePolygon],
        layer_name: str = 'Greenspace',
    ) -> folium.Map:
        """
        Add counted greenspace polygons

        Args:
            map_obj: Folium map
            polygons: Polygons that contributed to the greenspace share
            layer_name: Name for the layer

        Returns:
            Updated map
        """
        polygons = list(polygons)
        if not polygons:
            return map_obj
        gdf = greenspace_geodataframe(polygons)

        folium.GeoJson(
            gdf.__geo_interface__,
            name=layer_name,
            style_function=lambda x: {
                'fillColor': '#16a34a',
                'color': '#15803d',
                'weight': 1,
                'fillOpacity': 0.35,
            },
            tooltip=folium.GeoJsonTooltip(fields=['name', 'area_km2'], aliases=['Name', 'Area (km²)'], localize=True),
        ).add_to(map_obj)
        return map_obj

    def add_risk_legend(self, map_obj: folium.Map) -> folium.Map:
        """Four-tier step legend, Low to High"""
        bounds = sorted(t for t, _ in RISK_THRESHOLDS)
        legend = cmap.StepColormap(
            colors=[RISK_COLORS[RiskLevel.LOW]] + [RISK_COLORS[level] for _, level in sorted(RISK_THRESHOLDS)],
            index=[0] + bounds + [100],
            vmin=0,
            vmax=100,
            caption='Heat risk score',
        )
        map_obj.add_child(legend)
        return map_obj

    def create_outcome_map(self, outcome: LookupOutcome, circle: Polygon = None) -> folium.Map:
        """Base map + greenspace + search circle + marker + legend"""
        loc = outcome.location
        m = self.create_base_map(loc.latitude, loc.longitude)
        self.add_greenspace_layer(m, outcome.greenspace.polygons)
        if circle is not None:
            self.add_reference_circle(m, circle)
        self.add_risk_marker(m, loc.latitude, loc.longitude, outcome.assessment.score)
        self.add_risk_legend(m)
        return m


def greenspace_geodataframe(polygons: Iterable[GreenspacePolygon]) -> gpd.GeoDataFrame:
    """GeoDataFrame (EPSG:4326) with name, osm_id and geodesic area per polygon"""
    rows = [
        {
            'osm_id': p.osm_id,
            'name': p.tags.get('name', 'Unnamed'),
            'area_km2': round(geodesic_area_km2(p.ring), 3),
            'geometry': Polygon(p.ring),
        }
        for p in polygons
    ]
    return gpd.GeoDataFrame(rows, columns=['osm_id', 'name', 'area_km2', 'geometry'], geometry='geometry', crs='EPSG:4326')


class PlotlyVisualizer:
    """
    Plotly charts for the community impact dashboard
    """

    @staticmethod
    def create_plan_impact_chart(plan_df: pd.DataFrame, title: str = 'Plan impact by action') -> go.Figure:
        """
        Side-by-side bars of heat drop and CO2 saved per action label

        Args:
            plan_df: Output of actions.plan_to_dataframe
            title: Plot title

        Returns:
            Plotly figure
        """
        totals = (
            plan_df.groupby('action', sort=False)[['heat_drop', 'co2_saved_kg']]
            .sum()
            .reset_index()
        )
        long_df = totals.melt(id_vars='action', var_name='metric', value_name='value')
        long_df['metric'] = long_df['metric'].map({
            'heat_drop': 'Heat score reduction',
            'co2_saved_kg': 'CO₂ avoided (kg/yr)',
        })

        fig = px.bar(
            long_df,
            x='action',
            y='value',
            color='metric',
            facet_col='metric',
            title=title,
            template='plotly_white',
            color_discrete_sequence=['#f59e0b', '#047857'],
        )
        fig.update_yaxes(matches=None, title_text='')
        fig.update_xaxes(title_text='')
        fig.for_each_annotation(lambda a: a.update(text=a.text.split('=')[-1]))
        fig.update_layout(showlegend=False)
        return fig
