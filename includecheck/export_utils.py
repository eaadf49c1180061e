#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Export utilities for writing resolution results to various file formats."""

import os
import json
import logging
from typing import Any

import networkx as nx
from networkx.readwrite import json_graph

from .color_utils import print_error, print_success
from .constants import SUPPORTED_GRAPH_FORMATS, ValidationError
from .path_utils import pretty_string
from .report_utils import result_to_dict
from .resolver_types import IncludeResolverResult

logger = logging.getLogger(__name__)


def build_include_graph(result: IncludeResolverResult) -> Any:
    """Build a directed graph of the includes followed during a run.

    Nodes are parsed files keyed by their '/'-rendered path. An edge A -> B means
    A includes B.

    Node attributes:
        - label: File basename
        - path: Full file path
        - fan_in, fan_out: Number of includers and of included files

    Returns:
        nx.DiGraph
    """
    graph = nx.DiGraph()
    for file_path in result.parsed_files:
        node = pretty_string(file_path)
        graph.add_node(node, label=os.path.basename(file_path), path=node)

    for including_file, included_file in sorted(result.include_edges):
        graph.add_edge(pretty_string(including_file), pretty_string(included_file))

    for node in graph.nodes():
        graph.nodes[node]["fan_in"] = graph.in_degree(node)
        graph.nodes[node]["fan_out"] = graph.out_degree(node)

    return graph


def export_include_graph(filename: str, result: IncludeResolverResult) -> None:
    """Export the include graph of a result.

    Supports: GraphML (.graphml), DOT (.dot), GEXF (.gexf), JSON (.json)

    Args:
        filename: Output file, the extension selects the format
        result: Resolution result

    Raises:
        ValidationError: If the extension is not a supported graph format
    """
    ext = os.path.splitext(filename)[1].lower()
    if ext not in SUPPORTED_GRAPH_FORMATS:
        raise ValidationError(f"Unsupported graph format '{ext}'. Supported: {', '.join(SUPPORTED_GRAPH_FORMATS)}")

    graph = build_include_graph(result)
    logger.info("Exporting include graph: %d nodes, %d edges", graph.number_of_nodes(), graph.number_of_edges())

    try:
        if ext == ".graphml":
            nx.write_graphml(graph, filename)
        elif ext == ".gexf":
            nx.write_gexf(graph, filename)
        elif ext == ".dot":
            nx.drawing.nx_pydot.write_dot(graph, filename)
        else:
            with open(filename, "w", encoding="utf-8") as f:
                json.dump(json_graph.node_link_data(graph), f, indent=2)
    except ImportError:
        logger.error("Missing dependency for graph export")
        print_error("Missing dependency for graph export. Install pydot for DOT format.")
        return
    except IOError as e:
        logger.error("Failed to export graph: %s", e)
        print_error(f"Failed to export graph: {e}")
        return

    print_success(f"Exported include graph to {filename}")


def export_result_json(filename: str, result: IncludeResolverResult) -> None:
    """Write the JSON report of a result to a file.

    Raises:
        IOError: If the file cannot be written
    """
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(result_to_dict(result), f, indent=2)
    logger.info("Saved JSON report to %s", filename)
