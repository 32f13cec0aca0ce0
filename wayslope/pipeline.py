"""
Main Pipeline Orchestrator for way slope statistics

Implements the four sequential passes:

  1. Filter: select ways whose tags match
  2. Resolve: collect the distinct node ids those ways reference
  3. Sample: one DEM read per node -> ElevationIndex (frozen)
  4. Aggregate: one WayStatistics per selected way

and the JSON output step.
"""

import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

from loguru import logger

from .config import get_config, validate_config, PipelineConfig
from .models import ElevationIndex, WayStatistics, to_mapping_document, to_records_document
from .collectors.osm import OSMNetwork, OSMWay, FilterSpec, matches, parse_filter, read_network
from .collectors.elevation_sampler import ElevationSampler, open_raster
from .analysis import WayAggregator
from .errors import ParseError, SerializationError, OutputWriteError


class SlopePipeline:
    """
    Pipeline computing per-way distance / climb / descent

    Usage:
        pipeline = SlopePipeline()
        results = pipeline.run_files("area.osm.pbf", "dem.tif", parse_filter("highway"))
        pipeline.save(results, "output/slopes.json")
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or get_config()
        validate_config(self.config)
        self.aggregator = WayAggregator(mode=self.config.climb_distance_mode)

    def run_files(
        self,
        osm_file: Union[str, Path],
        elevation_file: Union[str, Path],
        filters: Optional[FilterSpec] = None
    ) -> List[WayStatistics]:
        """
        Read both inputs and run the pipeline

        Args:
            osm_file: OSM file (PBF or XML)
            elevation_file: DEM raster
            filters: Tag filter; defaults to the configured default filter

        Returns:
            WayStatistics for every selected way, ordered by way id
        """
        if filters is None:
            filters = parse_filter(self.config.default_filter)

        network = read_network(osm_file, lambda tags: matches(tags, filters))

        with open_raster(elevation_file) as dataset:
            sampler = ElevationSampler(
                dataset,
                band=self.config.raster.band,
                resampling=self.config.raster.resampling,
                reproject=self.config.raster.reproject
            )
            return self.run(network, sampler, filters)

    def run(
        self,
        network: OSMNetwork,
        sampler: ElevationSampler,
        filters: FilterSpec
    ) -> List[WayStatistics]:
        """
        Run filter, resolve, sample and aggregate over an already-read network

        Args:
            network: Ways and nodes; nodes must cover every selected way
            sampler: Anything with sample(lon, lat) -> float
            filters: Tag filter applied to network.ways

        Returns:
            WayStatistics for every selected way, ordered by way id
        """
        # ============================================================
        # PASS 1: Filter
        # ============================================================
        ways = self.select_ways(network.ways, filters)
        logger.info(f"Selected {len(ways):,} of {len(network.ways):,} ways")

        # ============================================================
        # PASS 2: Resolve dependent nodes
        # ============================================================
        node_ids = self.resolve_nodes(ways, network)
        logger.info(f"Resolved {len(node_ids):,} distinct nodes")

        # ============================================================
        # PASS 3: Sample elevations
        # ============================================================
        elevations = self.build_elevation_index(node_ids, network, sampler)
        logger.info(f"Sampled elevation for {len(elevations):,} nodes")

        # ============================================================
        # PASS 4: Aggregate
        # ============================================================
        results = [self.aggregator.aggregate(way, elevations, network.nodes) for way in ways]
        results.sort(key=lambda s: s.way_id)
        logger.info(f"Computed slope statistics for {len(results):,} ways")

        return results

    @staticmethod
    def select_ways(ways: List[OSMWay], filters: FilterSpec) -> List[OSMWay]:
        return [way for way in ways if matches(way.tags, filters)]

    @staticmethod
    def resolve_nodes(ways: List[OSMWay], network: OSMNetwork) -> List[int]:
        """
        Distinct node ids referenced by the ways, in first-seen order

        Raises:
            ParseError: If a referenced node is missing from the network
        """
        seen = set()
        node_ids = []
        for way in ways:
            for node_id in way.nodes:
                if node_id in seen:
                    continue
                if node_id not in network.nodes:
                    raise ParseError(
                        f"Way {way.id} references node {node_id}, which is missing from the OSM file"
                    )
                seen.add(node_id)
                node_ids.append(node_id)
        return node_ids

    @staticmethod
    def build_elevation_index(
        node_ids: List[int],
        network: OSMNetwork,
        sampler: ElevationSampler
    ) -> ElevationIndex:
        """Sample each node once; the returned index is read-only"""
        def sampled():
            for node_id in node_ids:
                node = network.nodes[node_id]
                elevation = sampler.sample(node.lon, node.lat)
                logger.debug(f"Node {node_id} ({node.lat:.6f}, {node.lon:.6f}) = {elevation:.2f}m")
                yield node_id, elevation

        return ElevationIndex(sampled())

    def to_document(self, results: List[WayStatistics]) -> Any:
        """JSON-ready document in the configured output shape"""
        if self.config.output.shape == "records":
            return to_records_document(results)
        return to_mapping_document(results)

    def dumps(self, results: List[WayStatistics]) -> str:
        """Serialize results to a JSON string"""
        try:
            return json.dumps(
                self.to_document(results),
                indent=self.config.output.indent,
                allow_nan=False
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Unable to serialize result to JSON: {e}") from e

    def save(self, results: List[WayStatistics], output_path: Union[str, Path]) -> str:
        """Save slope statistics to a JSON file"""
        payload = self.dumps(results)
        output_path = str(output_path)
        try:
            os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(payload)
        except OSError as e:
            raise OutputWriteError(f"Unable to write file {output_path}: {e}") from e

        logger.info(f"Saved slope statistics for {len(results):,} ways to {output_path}")
        return output_path
