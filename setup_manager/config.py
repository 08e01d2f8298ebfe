"""
Configuration for Setup Manager.

Directory layout, task names and the remote resources fetched by each task.
"""

from pathlib import Path

# Repository root; all tools, databases and assets live below it
ROOT_DIR = Path(__file__).resolve().parent.parent

# Directory layout (relative to the root)
TOOLS_DIR = "tools"
DATABASES_DIR = "databases"
INPUT_DIR = "assets/input"
REFERENCES_DIR = "assets/references"
SEQUENCING_DIR = "assets/references/sequencing"
MAPPABILITY_DIR = "assets/references/mappability"

VALID_TASKS = ("all", "db_install", "db_setup", "tools_install", "tools_setup", "ref", "example")
DEFAULT_TASK = "all"

# Large-file host (Google Drive) download endpoint
LARGE_FILE_URL = "https://drive.google.com/uc?export=download"

# GATK
GATK_VERSION = "3.8-1-0-gf15c1c3ef"
GATK_URL = (
    "https://storage.googleapis.com/gatk-software/package-archive/gatk/"
    f"GenomeAnalysisTK-{GATK_VERSION}.tar.bz2"
)
GATK_PREFIX = "GenomeAnalysisTK"
GATK_DIRNAME = "gatk"

# ANNOVAR (download link is sent by email after registration)
ANNOVAR_REGISTER_URL = "http://download.openbioinformatics.org/annovar_download_form.php"
ANNOVAR_URL_ENV = "ANNOVAR_URL"
ANNOVAR_DIRNAME = "annovar"
ANNOVAR_BUILD = "hg19"
ANNOVAR_DATASETS = [
    "refGene",
    "dbnsfp41a",
    "gnomad211_genome",  # gnomAD 2.1.1, genomes only
    "avsnp150",
    "clinvar_20200316",
    "intervar_20180118",
]

# Databases: (url, destination relative to the databases directory)
DATABASE_FILES = [
    ("https://ftp.ncbi.nlm.nih.gov/snp/organisms/human_9606_b150_GRCh37p13/VCF/All_20170710.vcf.gz",
     "dbSNP/snp150hg19.vcf.gz"),
    ("https://ftp.ncbi.nlm.nih.gov/snp/organisms/human_9606_b150_GRCh37p13/VCF/All_20170710.vcf.gz.tbi",
     "dbSNP/snp150hg19.vcf.gz.tbi"),
    ("http://www.cancerhotspots.org/files/hotspots_v2.xls", "hotspots_v2.xls"),
    ("https://www.dgidb.org/data/monthly_tsvs/2020-Oct/interactions.tsv", "DGIdb_interactions.tsv"),
]

# R script (in the databases directory) deriving gene-set databases from MSigDB hallmarks
GENESET_SCRIPT = "geneset_generation.R"

# Archives on the large-file host: (file id, archive name, target directory)
REFERENCE_ARCHIVES = [
    ("1QZSkniYbI1cWWj8CA6-FS93ViiAn8z_G", "chromosomes.tar.gz", REFERENCES_DIR),
    ("1rSC-IuRYhdVvulo2yrSkHSBgVAo4iRt0", "genome.tar.gz", REFERENCES_DIR),
    ("1w8PL_J6k0X96W6IkXkjOOi_VnsDaaw8U", "mappability.tar.gz", MAPPABILITY_DIR),
]
EXAMPLE_ARCHIVES = [
    ("1gcCmsqJpbMsLSLmRfo3Afc_aTJVX7ziK", "Capture_Regions.tar.gz", SEQUENCING_DIR),
    ("1YQLyUtkZALZ5Bv-MTvEJJOXAOT_R59Z7", "data.tar.gz", INPUT_DIR),
]
